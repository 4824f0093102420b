"""Bounded parallel download of job sources."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Sequence

from domain.exceptions import DownloadFailed
from domain.models import ByteCounter, SourceRef
from domain.storage import IObjectStore
from shared.logging import get_logger

logger = get_logger(__name__)


class ObjectDownloader:
    """
    Fetches every source object into the scratch directory.
    Implements IDownloader protocol.

    At most ``concurrency`` downloads are in flight at once. On the first
    failure, downloads that have not started yet are cancelled and the ones
    already running are allowed to finish; their files stay in place.
    """

    def __init__(self, store: IObjectStore, concurrency: int = 50):
        """
        Initialize downloader.

        Args:
            store: Object store bound to the job credentials
            concurrency: Maximum number of simultaneous downloads
        """
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._store = store
        self.concurrency = concurrency
        self._logger = get_logger(__name__)

    def download_all(
        self,
        sources: Sequence[SourceRef],
        scratch_dir: Path,
        counter: ByteCounter
    ) -> int:
        """
        Download all sources to ``scratch_dir/<display name>``.

        Args:
            sources: Parsed source references
            scratch_dir: Job scratch directory
            counter: Running byte total shared by the workers

        Returns:
            Total bytes received so far by ``counter``

        Raises:
            DownloadFailed: Wrapping the first download error
        """
        self._logger.info(
            f"Downloading {len(sources)} files (concurrency={self.concurrency})"
        )

        workers = max(1, min(self.concurrency, len(sources)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="download") as pool:
            futures = {
                pool.submit(self._download_one, source, scratch_dir, counter): source
                for source in sources
            }

            for future in as_completed(futures):
                source = futures[future]
                try:
                    future.result()
                except Exception as e:
                    for other in futures:
                        other.cancel()
                    self._logger.error(f"Error downloading {source.full_key}: {e}")
                    raise DownloadFailed(f"Failed to download {source.full_key}: {e}") from e

        self._logger.info(f"All downloads completed ({counter.value} bytes)")
        return counter.value

    def _download_one(self, source: SourceRef, scratch_dir: Path, counter: ByteCounter) -> int:
        self._logger.info(f"Downloading file {source.full_key}")
        local_path = scratch_dir / source.name

        received = self._store.download(
            source.bucket,
            source.key,
            local_path,
            on_bytes=counter.add
        )

        self._logger.info(f"Download completed: {source.name} ({received} bytes)")
        return received
