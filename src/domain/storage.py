"""
Object storage domain models and protocols.

Domain layer for S3-compatible object storage (SOLID).
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Callable, Dict, Any
from pathlib import Path


ProgressCallback = Callable[[int], None]


@dataclass
class ObjectInfo:
    """Object metadata returned by a HEAD lookup."""
    bucket: str
    key: str
    size: int
    etag: Optional[str] = None

    @property
    def name(self) -> str:
        """Get object name (basename)."""
        return Path(self.key).name

    def __str__(self) -> str:
        return f"{self.bucket}/{self.key} ({self.size} bytes)"


@dataclass(frozen=True)
class StoreCredentials:
    """Per-job object store credentials."""
    region: str
    access_key_id: str
    secret_access_key: str
    endpoint: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'StoreCredentials':
        """Build from the camelCase ``credentials`` block of a job payload."""
        return cls(
            region=data.get('region', ''),
            access_key_id=data.get('accessKeyId', ''),
            secret_access_key=data.get('secretAccessKey', ''),
            endpoint=data.get('endpoint')
        )

    def validate(self) -> bool:
        """Check if credentials are set."""
        return bool(self.region and self.access_key_id and self.secret_access_key)

    def __repr__(self) -> str:
        return f"StoreCredentials(region={self.region!r}, access_key_id={self.access_key_id!r})"


class IObjectStore(Protocol):
    """Protocol for an authenticated object store client."""

    def head(self, bucket: str, key: str) -> ObjectInfo:
        """
        Fetch object metadata without the body.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Object metadata
        """
        ...

    def download(
        self,
        bucket: str,
        key: str,
        local_path: Path,
        on_bytes: Optional[ProgressCallback] = None
    ) -> int:
        """
        Stream an object into a local file.

        Args:
            bucket: Bucket name
            key: Object key
            local_path: Destination file
            on_bytes: Called with the size of every chunk written

        Returns:
            Number of bytes written
        """
        ...

    def upload(
        self,
        local_path: Path,
        bucket: str,
        key: str,
        extra_args: Optional[Dict[str, str]] = None,
        on_bytes: Optional[ProgressCallback] = None
    ) -> str:
        """
        Stream a local file to the store.

        Args:
            local_path: File to upload
            bucket: Bucket name
            key: Object key
            extra_args: Store parameters such as ACL and StorageClass
            on_bytes: Called with the size of every chunk sent

        Returns:
            Location URL of the uploaded object
        """
        ...
