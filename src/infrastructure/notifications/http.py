"""HTTP callback notification strategy."""

from typing import Optional

import requests

from domain.exceptions import NotificationFailed
from domain.models import JobDescriptor, NotificationSpec, ResultPayload
from shared.logging import get_logger

logger = get_logger(__name__)

ID_PLACEHOLDER = '{:id}'


def render_url(template: str, job_id: Optional[str]) -> str:
    """Replace every ``{:id}`` in a URL template with the job id."""
    return template.replace(ID_PLACEHOLDER, job_id or '')


class HttpNotification:
    """
    Sends ``{id, status, location, size}`` as JSON to a configured URL.
    Implements INotificationStrategy protocol.

    Notification parameters:
        url: Target URL, may contain ``{:id}``
        method: HTTP method (default POST)
        strictSSL: Verify TLS certificates (default True)

    Any response, 2xx or not, counts as delivered; only transport errors fail.
    """

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self._logger = get_logger(__name__)

    def __call__(
        self,
        job: JobDescriptor,
        notification: NotificationSpec,
        results: ResultPayload
    ) -> int:
        url_template = notification.get('url')
        if not url_template:
            raise NotificationFailed("HTTP notification has no url")

        method = str(notification.get('method') or 'POST').upper()
        strict_ssl = notification.get('strictSSL')
        verify = True if strict_ssl is None else bool(strict_ssl)
        url = render_url(url_template, job.job_id)

        self._logger.info(f'Sending HTTP notification to "{method} {url_template}"')

        body = {'id': job.job_id}
        body.update(results.as_dict())

        try:
            response = requests.request(
                method,
                url,
                json=body,
                verify=verify,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self._logger.error("Error sending HTTP notification")
            raise NotificationFailed(f"{method} {url} failed: {e}") from e

        self._logger.info(f"Notification sent, status code: {response.status_code}")
        if 200 <= response.status_code < 300:
            self._logger.info(f"Response was successful, response body: {response.text}")

        return response.status_code
