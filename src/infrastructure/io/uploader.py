"""Archive uploader."""

import threading
import time
from pathlib import Path

from domain.exceptions import UploadFailed
from domain.models import DestinationRef, UploadResult, DEFAULT_ACL, DEFAULT_STORAGE_CLASS
from domain.storage import IObjectStore
from shared.logging import get_logger

logger = get_logger(__name__)


class UploadProgress:
    """Callback for boto3 transfers that logs upload progress.

    boto3 calls it from its transfer threads with the size of each chunk sent.
    """

    def __init__(self, total_bytes: int, step_percent: int = 10):
        self._total = total_bytes
        self._step = step_percent
        self._seen_so_far = 0
        self._next_report = step_percent
        self._lock = threading.Lock()
        self._logger = get_logger(__name__)

    @property
    def seen(self) -> int:
        return self._seen_so_far

    def __call__(self, bytes_amount: int) -> None:
        with self._lock:
            self._seen_so_far += bytes_amount
            if self._total <= 0:
                self._logger.debug(f"Upload progress: {self._seen_so_far} bytes transferred")
                return

            pct = (self._seen_so_far / self._total) * 100
            if pct >= self._next_report:
                self._logger.info(
                    f"Upload progress: {self._seen_so_far}/{self._total} bytes ({pct:.1f}%)"
                )
                while self._next_report <= pct:
                    self._next_report += self._step


class ArchiveUploader:
    """
    Uploads the archive to its destination address.
    Implements IUploader protocol.
    """

    def __init__(self, store: IObjectStore):
        self._store = store
        self._logger = get_logger(__name__)

    def upload(
        self,
        file_path: Path,
        destination: DestinationRef,
        acl: str = DEFAULT_ACL,
        storage_class: str = DEFAULT_STORAGE_CLASS
    ) -> UploadResult:
        """
        Upload a file to the destination with ACL and storage class.

        Args:
            file_path: Archive to upload
            destination: Destination address
            acl: Canned ACL
            storage_class: Storage class hint

        Returns:
            UploadResult with the object location

        Raises:
            UploadFailed: On any transport or store-side error
        """
        if not file_path.exists():
            raise UploadFailed(f"File not found: {file_path}")

        file_size = file_path.stat().st_size
        self._logger.info(
            f"Uploading compressed file to {destination.full_key} "
            f"({file_size} bytes, acl={acl}, storage_class={storage_class})"
        )

        started = time.time()
        try:
            location = self._store.upload(
                file_path,
                destination.bucket,
                destination.key,
                extra_args={'ACL': acl, 'StorageClass': storage_class},
                on_bytes=UploadProgress(file_size)
            )
        except Exception as e:
            self._logger.error(f"Error uploading file: {e}")
            raise UploadFailed(f"Upload to {destination.full_key} failed: {e}") from e

        self._logger.info(f"File available at {location}")

        return UploadResult(
            success=True,
            url=location,
            bucket=destination.bucket,
            key=destination.key,
            size_bytes=file_size,
            duration_seconds=time.time() - started
        )
