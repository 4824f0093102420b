"""Domain layer package."""

from .models import (
    ObjectRef,
    SourceRef,
    DestinationRef,
    NotificationSpec,
    JobDescriptor,
    ResultPayload,
    PipelineState,
    ByteCounter,
    NotificationReport,
    UploadResult,
    JobResult,
)
from .storage import ObjectInfo, StoreCredentials, IObjectStore
from .descriptor import parse_address, parse_job
from .exceptions import (
    DomainException,
    AuthenticationFailed,
    InvalidJobPayload,
    MalformedAddress,
    NameCollision,
    ScratchSpaceUnavailable,
    SourceUnavailable,
    SourceTooLarge,
    DownloadFailed,
    ArchiveFailed,
    ArchiveStatUnavailable,
    UploadFailed,
    NotificationFailed,
    ConfigurationError,
    JobFailed,
)
from .protocols import (
    IScratchSpace,
    IHeaderValidator,
    IDownloader,
    IArchiver,
    ISizeReporter,
    IUploader,
    INotificationStrategy,
    INotifier,
    ILogger,
    IMetricsCollector,
)

__all__ = [
    # Models
    "ObjectRef",
    "SourceRef",
    "DestinationRef",
    "NotificationSpec",
    "JobDescriptor",
    "ResultPayload",
    "PipelineState",
    "ByteCounter",
    "NotificationReport",
    "UploadResult",
    "JobResult",
    "ObjectInfo",
    "StoreCredentials",
    "IObjectStore",
    # Parsing
    "parse_address",
    "parse_job",
    # Exceptions
    "DomainException",
    "AuthenticationFailed",
    "InvalidJobPayload",
    "MalformedAddress",
    "NameCollision",
    "ScratchSpaceUnavailable",
    "SourceUnavailable",
    "SourceTooLarge",
    "DownloadFailed",
    "ArchiveFailed",
    "ArchiveStatUnavailable",
    "UploadFailed",
    "NotificationFailed",
    "ConfigurationError",
    "JobFailed",
    # Protocols
    "IScratchSpace",
    "IHeaderValidator",
    "IDownloader",
    "IArchiver",
    "ISizeReporter",
    "IUploader",
    "INotificationStrategy",
    "INotifier",
    "ILogger",
    "IMetricsCollector",
]
