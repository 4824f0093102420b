"""Base archiver implementation using Template Method pattern."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.exceptions import ArchiveFailed
from shared.logging import get_logger

logger = get_logger(__name__)


class BaseArchiver(ABC):
    """
    Abstract base class for archivers.

    Every implementation archives the whole source directory, recursively,
    into a single file at ``source_dir / archive_name``.
    """

    def __init__(self):
        self._logger = get_logger(self.__class__.__name__)

    def archive(self, source_dir: Path, archive_name: str) -> Path:
        """
        Template method for archiving a directory.

        Args:
            source_dir: Directory to archive (the job scratch directory)
            archive_name: File name of the archive inside source_dir

        Returns:
            Path to the archive

        Raises:
            ArchiveFailed: If archiving fails
        """
        self._validate_inputs(source_dir, archive_name)

        archive_path = source_dir / archive_name
        self._logger.info(f"Creating compressed file {archive_path}")

        self._execute_archiving(source_dir, archive_name)

        if not archive_path.is_file():
            raise ArchiveFailed(f"Archiver reported success but {archive_path} is missing")

        self._logger.info("Compressed file created")
        return archive_path

    @abstractmethod
    def _execute_archiving(self, source_dir: Path, archive_name: str) -> None:
        """
        Produce ``source_dir / archive_name`` (implemented by subclasses).

        Raises:
            ArchiveFailed: If archiving fails
        """
        pass

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """
        Check if this archiver is available in current environment.

        Returns:
            True if archiver can be used
        """
        pass

    def _validate_inputs(self, source_dir: Path, archive_name: str) -> None:
        if not source_dir.is_dir():
            raise ArchiveFailed(f"Source directory not found: {source_dir}")

        if not archive_name or '/' in archive_name or archive_name in ('.', '..'):
            raise ArchiveFailed(f"Invalid archive name: {archive_name!r}")
