"""Protocol definitions for dependency inversion."""

from typing import Protocol, Optional, Sequence
from pathlib import Path

from .models import (
    ByteCounter, DestinationRef, JobDescriptor, NotificationReport, NotificationSpec,
    ResultPayload, SourceRef, UploadResult
)


class IScratchSpace(Protocol):
    """Interface for managing the per-job scratch directory."""

    def create(self, invocation_id: Optional[str] = None) -> Path:
        """Create a fresh scratch directory for one invocation."""
        ...

    def cleanup(self, scratch_dir: Path) -> None:
        """Remove a scratch directory."""
        ...


class IHeaderValidator(Protocol):
    """Interface for the pre-flight size accounting pass."""

    def validate(self, sources: Sequence[SourceRef]) -> int:
        """Look up every source and return the expected total size."""
        ...


class IDownloader(Protocol):
    """Interface for fetching sources into the scratch directory."""

    def download_all(
        self,
        sources: Sequence[SourceRef],
        scratch_dir: Path,
        counter: ByteCounter
    ) -> int:
        """Download every source; return the total number of bytes received."""
        ...


class IArchiver(Protocol):
    """Interface for compressing a directory into a single archive."""

    def archive(self, source_dir: Path, archive_name: str) -> Path:
        """Archive source_dir recursively into source_dir/archive_name."""
        ...

    @classmethod
    def is_available(cls) -> bool:
        """Check if this archiver can be used in current environment."""
        ...


class ISizeReporter(Protocol):
    """Interface for measuring the produced archive."""

    def report(self, archive_path: Path, total_source_bytes: int) -> int:
        """Return the archive size in bytes and log the compression ratio."""
        ...


class IUploader(Protocol):
    """Interface for uploading the archive."""

    def upload(
        self,
        file_path: Path,
        destination: DestinationRef,
        acl: str,
        storage_class: str
    ) -> UploadResult:
        """Upload a file to the destination address."""
        ...


class INotificationStrategy(Protocol):
    """Delivers a result payload given notification parameters."""

    def __call__(
        self,
        job: JobDescriptor,
        notification: NotificationSpec,
        results: ResultPayload
    ) -> Optional[int]:
        """Send one notification."""
        ...


class INotifier(Protocol):
    """Interface for dispatching all notifications of a job."""

    def notify(self, job: JobDescriptor, results: ResultPayload) -> NotificationReport:
        """Dispatch results to every configured notification; never raises."""
        ...


class ILogger(Protocol):
    """Interface for logging."""

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        ...

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        ...


class IMetricsCollector(Protocol):
    """Interface for collecting metrics."""

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        ...

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return elapsed time."""
        ...

    def record_metric(self, name: str, value: float) -> None:
        """Record a metric value."""
        ...

    def increment_counter(self, name: str, amount: int = 1) -> None:
        """Increment a counter."""
        ...

    def get_summary(self) -> dict:
        """Get summary of all metrics."""
        ...

    def elapsed_time(self) -> float:
        """Get total elapsed time since start."""
        ...

    def log_summary(self, logger: ILogger) -> None:
        """Write a summary of all metrics to a logger."""
        ...
