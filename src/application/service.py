"""Job intake: authenticate the event, parse it, run the pipeline."""

import hmac
from typing import Callable, Optional

from domain.descriptor import parse_job
from domain.exceptions import AuthenticationFailed, InvalidJobPayload
from domain.models import JobDescriptor, JobResult
from application.factories import create_orchestrator
from application.orchestrator import ArchiveJobOrchestrator
from infrastructure.config import RuntimeConfig
from shared.logging import get_logger
from shared.types import Event

logger = get_logger(__name__)

OrchestratorFactory = Callable[[JobDescriptor, RuntimeConfig], ArchiveJobOrchestrator]


def authenticate(token: Optional[str], expected: Optional[str]) -> None:
    """
    Compare the event token with the configured secret.

    Fails closed: a missing expected secret rejects every event.

    Raises:
        AuthenticationFailed: If the token does not match
    """
    if not expected:
        raise AuthenticationFailed("No SECRET_TOKEN configured; refusing to process jobs")

    if not isinstance(token, str) or not hmac.compare_digest(token.encode(), expected.encode()):
        raise AuthenticationFailed("Invalid auth token")


def process_event(
    event: Event,
    config: RuntimeConfig,
    invocation_id: Optional[str] = None,
    orchestrator_factory: OrchestratorFactory = create_orchestrator
) -> JobResult:
    """
    Run one job event through the pipeline.

    Args:
        event: ``{"auth": ..., "data": {...}}``
        config: Host configuration
        invocation_id: Request id of the ephemeral host, if any
        orchestrator_factory: Builds the orchestrator for the parsed job

    Returns:
        JobResult of the run

    Raises:
        AuthenticationFailed: If the token is wrong (nothing is processed)
        InvalidJobPayload, MalformedAddress, NameCollision: If the job
            cannot be parsed
    """
    if not isinstance(event, dict):
        raise InvalidJobPayload("Event must be an object")

    try:
        authenticate(event.get('auth'), config.secret_token)
    except AuthenticationFailed:
        logger.error("Auth failed")
        raise

    logger.info("Started processing job")
    job = parse_job(event.get('data'))

    config.apply_search_paths()

    orchestrator = orchestrator_factory(job, config)
    return orchestrator.process(job, invocation_id=invocation_id)
