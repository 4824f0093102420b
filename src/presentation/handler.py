"""Lambda-style entry point for archive jobs."""

from typing import Any, Dict, Optional

from domain.exceptions import DomainException, JobFailed
from application.service import process_event
from infrastructure.config import ConfigLoader, RuntimeConfig
from shared.logging import get_logger, set_level
from shared.types import Event

logger = get_logger(__name__)


def handler(event: Event, context: Any = None, config: Optional[RuntimeConfig] = None) -> Dict[str, Any]:
    """
    Process one job event.

    The invocation id comes from ``context.aws_request_id`` when the host
    provides one. Success returns a summary dict; any failure raises
    JobFailed so the host marks the invocation as failed.
    """
    if config is None:
        config = ConfigLoader().load()
    set_level(config.log_level)

    invocation_id = getattr(context, 'aws_request_id', None)

    try:
        result = process_event(event, config, invocation_id=invocation_id)
    except DomainException as e:
        logger.error(f"Job rejected: {e}")
        raise JobFailed(str(e)) from e

    if not result.success:
        logger.error("Job processing failed")
        raise JobFailed("; ".join(result.errors) or "Job processing failed")

    return {
        'id': result.job_id,
        'status': 'success',
        'location': result.location,
        'size': result.size_bytes,
    }
