"""Archive size and compression ratio reporting."""

from pathlib import Path
from typing import Optional

from domain.exceptions import ArchiveStatUnavailable
from shared.logging import get_logger

logger = get_logger(__name__)


def compression_ratio(archive_size: int, total_source_bytes: int) -> Optional[str]:
    """
    Percentage by which the sources shrank, formatted with two decimals.

    ``(1 - archive / total) * 100``; 1000 source bytes compressed to 400
    gives ``"60.00"``. Returns None when there are no source bytes.
    """
    if total_source_bytes <= 0:
        return None
    return f"{(1 - archive_size / total_source_bytes) * 100:.2f}"


class SizeReporter:
    """Implements ISizeReporter protocol."""

    def __init__(self):
        self._logger = get_logger(__name__)

    def report(self, archive_path: Path, total_source_bytes: int) -> int:
        """
        Stat the archive and log the compression ratio.

        Raises:
            ArchiveStatUnavailable: If the archive is missing or unreadable
        """
        self._logger.info("Getting compressed file size")

        try:
            size = archive_path.stat().st_size
        except OSError as e:
            self._logger.error(f"Error getting compressed file size: {e}")
            raise ArchiveStatUnavailable(f"Cannot stat archive {archive_path}: {e}") from e

        self._logger.info(f"Compressed file size is {size}")

        ratio = compression_ratio(size, total_source_bytes)
        if ratio is None:
            self._logger.info("Compression ratio unavailable (no source bytes)")
        else:
            self._logger.info(f"Original files were compressed by {ratio}%")

        return size
