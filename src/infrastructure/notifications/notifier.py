"""Result notification dispatch."""

import json
from concurrent.futures import ThreadPoolExecutor

from domain.models import JobDescriptor, NotificationReport, NotificationSpec, ResultPayload
from infrastructure.notifications.registry import NotificationRegistry
from shared.logging import get_logger

logger = get_logger(__name__)

SENT = 'sent'
FAILED = 'failed'
SKIPPED = 'skipped'


class Notifier:
    """
    Dispatches a job result to every configured notification.
    Implements INotifier protocol.

    Unknown types are skipped and failures are logged; neither ever
    propagates, so one notification cannot block or abort another.
    """

    def __init__(self, registry: NotificationRegistry, concurrency: int = 10):
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._registry = registry
        self.concurrency = concurrency
        self._logger = get_logger(__name__)

    def notify(self, job: JobDescriptor, results: ResultPayload) -> NotificationReport:
        """
        Send results to all of the job's notifications.

        Args:
            job: Parsed job
            results: Shared, read-only result payload

        Returns:
            NotificationReport with per-outcome counts
        """
        report = NotificationReport()
        notifications = job.notifications
        if not notifications:
            self._logger.info("No notifications to send")
            return report

        self._logger.info(f"Sending {len(notifications)} notifications")

        workers = max(1, min(self.concurrency, len(notifications)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="notify") as pool:
            outcomes = list(pool.map(
                lambda n: self._dispatch(job, n, results),
                notifications
            ))

        report.sent = outcomes.count(SENT)
        report.failed = outcomes.count(FAILED)
        report.skipped = outcomes.count(SKIPPED)

        self._logger.info(
            f"Notifications done: {report.sent} sent, {report.failed} failed, "
            f"{report.skipped} skipped"
        )
        return report

    def _dispatch(
        self,
        job: JobDescriptor,
        notification: NotificationSpec,
        results: ResultPayload
    ) -> str:
        if not notification.type_tag:
            self._logger.warning("Notification without a type - skipping")
            return SKIPPED

        strategy = self._registry.resolve(notification.type_tag)
        if strategy is None:
            self._logger.warning(
                f'Unknown notification type "{notification.type_tag}" - skipping'
            )
            return SKIPPED

        try:
            strategy(job, notification, results)
        except Exception as e:
            self._logger.error(
                f"Failed to send notification:\n"
                f"{json.dumps(self._describe(notification), indent=4, default=str)}\n{e}"
            )
            return FAILED

        return SENT

    @staticmethod
    def _describe(notification: NotificationSpec) -> dict:
        described = {'type': notification.type}
        described.update(notification.params)
        return described
