"""Factories for archivers and fully wired orchestrators."""

from typing import Optional

from domain.exceptions import ConfigurationError, InvalidJobPayload
from domain.models import JobDescriptor
from domain.protocols import IArchiver
from domain.storage import IObjectStore
from application.orchestrator import ArchiveJobOrchestrator
from infrastructure.archive import ZipCommandArchiver, ZipfileArchiver
from infrastructure.config import RuntimeConfig
from infrastructure.io import ArchiveUploader, HeaderValidator, ObjectDownloader, SizeReporter
from infrastructure.notifications import NotificationRegistry, Notifier, default_registry
from infrastructure.storage import S3ObjectStore, ScratchSpace
from shared.logging import LoggerAdapter, get_logger
from shared.metrics import MetricsCollector

logger = get_logger(__name__)


class ArchiverFactory:
    """
    Chooses between the external ``zip`` tool and the in-process archiver.

    prefer:
        'auto'   - zip when it is on PATH, otherwise the zipfile archiver
        'zip'    - always the external tool (fails at archive time if missing)
        'native' - always the zipfile archiver
    """

    def __init__(self, prefer: str = 'auto'):
        self.prefer = prefer
        self._logger = get_logger(__name__)

    def create(self) -> IArchiver:
        if self.prefer == 'zip':
            self._logger.debug("Using zip command archiver")
            return ZipCommandArchiver()

        if self.prefer == 'native':
            self._logger.debug("Using zipfile archiver")
            return ZipfileArchiver()

        if self.prefer == 'auto':
            if ZipCommandArchiver.is_available():
                self._logger.debug("zip found on PATH, using zip command archiver")
                return ZipCommandArchiver()
            self._logger.info("zip not found on PATH, falling back to zipfile archiver")
            return ZipfileArchiver()

        raise ConfigurationError(f"Unknown archiver: {self.prefer}")


def create_orchestrator(
    job: JobDescriptor,
    config: RuntimeConfig,
    store: Optional[IObjectStore] = None,
    registry: Optional[NotificationRegistry] = None,
    metrics: Optional[MetricsCollector] = None
) -> ArchiveJobOrchestrator:
    """
    Wire every stage for one job.

    Args:
        job: Parsed job; its credentials build the object store
        config: Host configuration
        store: Pre-built object store (skips building one from credentials)
        registry: Notification registry (defaults to the built-in strategies)
        metrics: Metrics collector

    Returns:
        Orchestrator ready to process the job

    Raises:
        InvalidJobPayload: If the job credentials cannot build a client
    """
    if store is None:
        try:
            store = S3ObjectStore(
                job.credentials,
                connect_timeout=config.s3_connect_timeout,
                read_timeout=config.s3_read_timeout
            )
        except ValueError as e:
            # botocore rejects malformed regions and endpoints with ValueError subclasses
            raise InvalidJobPayload(f"Cannot use job credentials: {e}") from e

    validator = None
    if config.validate_headers:
        validator = HeaderValidator(
            store,
            max_file_bytes=config.max_file_bytes,
            max_total_bytes=config.max_total_bytes
        )

    return ArchiveJobOrchestrator(
        scratch=ScratchSpace(config.scratch_base, local_name=config.local_scratch_name),
        downloader=ObjectDownloader(store, concurrency=config.download_concurrency),
        archiver=ArchiverFactory(config.archiver).create(),
        size_reporter=SizeReporter(),
        uploader=ArchiveUploader(store),
        notifier=Notifier(
            registry or default_registry(http_timeout=config.notification_timeout),
            concurrency=config.notification_concurrency
        ),
        logger=LoggerAdapter(get_logger('orchestrator')),
        metrics=metrics or MetricsCollector(),
        validator=validator,
        cleanup_scratch=config.cleanup_scratch
    )
