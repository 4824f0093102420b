"""Domain models for archive jobs."""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple

from .storage import StoreCredentials


DEFAULT_ACL = 'private'
DEFAULT_STORAGE_CLASS = 'STANDARD'


@dataclass(frozen=True)
class ObjectRef:
    """Address of an object in the store: bucket, key and display name."""

    bucket: str
    key: str
    name: str

    def __post_init__(self):
        if not self.bucket:
            raise ValueError("Bucket cannot be empty")
        if not self.key:
            raise ValueError("Key cannot be empty")

    @property
    def full_key(self) -> str:
        """Original "bucket/key" form."""
        return f"{self.bucket}/{self.key}"

    def __str__(self) -> str:
        return self.full_key


@dataclass(frozen=True)
class SourceRef(ObjectRef):
    """An object to download into the scratch directory."""
    pass


@dataclass(frozen=True)
class DestinationRef(ObjectRef):
    """Where the archive gets uploaded."""
    pass


@dataclass(frozen=True)
class NotificationSpec:
    """A configured notification: type tag plus delivery parameters."""

    type: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def type_tag(self) -> str:
        """Lowercased type used for registry lookups."""
        return self.type.lower()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a delivery parameter."""
        return self.params.get(key, default)


@dataclass(frozen=True)
class JobDescriptor:
    """Normalized unit of work for one pipeline run."""

    sources: Tuple[SourceRef, ...]
    destination: DestinationRef
    credentials: StoreCredentials
    acl: str = DEFAULT_ACL
    storage_class: str = DEFAULT_STORAGE_CLASS
    notifications: Tuple[NotificationSpec, ...] = ()
    job_id: Optional[str] = None


@dataclass(frozen=True)
class ResultPayload:
    """Value handed to every notification strategy."""

    status: str
    location: str
    size: int

    def as_dict(self) -> Dict[str, Any]:
        return {'status': self.status, 'location': self.location, 'size': self.size}


class ByteCounter:
    """Running byte total shared by concurrent download workers."""

    def __init__(self, initial: int = 0):
        self._value = initial
        self._lock = threading.Lock()

    def add(self, amount: int) -> int:
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class PipelineState:
    """Transient state owned by a single pipeline run."""

    source_bytes: ByteCounter = field(default_factory=ByteCounter)
    expected_source_bytes: Optional[int] = None
    scratch_dir: Optional[Path] = None
    archive_path: Optional[Path] = None
    archive_size: Optional[int] = None
    location: Optional[str] = None

    @property
    def total_source_bytes(self) -> int:
        return self.source_bytes.value


@dataclass
class NotificationReport:
    """How many notifications were sent, failed, or skipped."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.sent + self.failed + self.skipped


@dataclass
class UploadResult:
    """Result of an archive upload."""

    success: bool
    url: Optional[str] = None
    bucket: str = ""
    key: str = ""
    size_bytes: int = 0
    duration_seconds: float = 0.0
    error: Optional[str] = None


@dataclass
class JobResult:
    """Outcome of a pipeline run."""

    success: bool
    job_id: Optional[str] = None
    archive_path: Optional[Path] = None
    location: Optional[str] = None
    size_bytes: int = 0
    duration_seconds: float = 0.0
    metrics: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Add an error message to the result."""
        self.errors.append(error)

    def add_metric(self, key: str, value: Any) -> None:
        """Add a metric to the result."""
        self.metrics[key] = value
