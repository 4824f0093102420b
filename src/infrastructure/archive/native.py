"""In-process zip archiver built on the standard library zipfile module."""

import os
import zipfile
from pathlib import Path
from typing import List

from domain.exceptions import ArchiveFailed
from infrastructure.archive.base import BaseArchiver


class ZipfileArchiver(BaseArchiver):
    """
    Archives a directory with :mod:`zipfile`, no external binary needed.

    Mirrors ``zip -r``: directories become entries of their own, paths are
    stored relative to the source directory, and the archive itself is
    left out.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED, compresslevel: int = 6):
        super().__init__()
        self.compression = compression
        self.compresslevel = compresslevel

    @classmethod
    def is_available(cls) -> bool:
        return True

    def _execute_archiving(self, source_dir: Path, archive_name: str) -> None:
        archive_path = source_dir / archive_name
        entries = self._collect_entries(source_dir, archive_path)
        self._logger.debug(f"Archiving {len(entries)} entries from {source_dir}")

        try:
            with zipfile.ZipFile(
                archive_path,
                'w',
                compression=self.compression,
                compresslevel=self.compresslevel
            ) as zf:
                for entry in entries:
                    arcname = entry.relative_to(source_dir).as_posix()
                    if entry.is_dir():
                        arcname += '/'
                    zf.write(entry, arcname)
                    self._logger.debug(f"  adding: {arcname}")
        except OSError as e:
            raise ArchiveFailed(f"Failed to write {archive_path}: {e}") from e

    @staticmethod
    def _collect_entries(source_dir: Path, archive_path: Path) -> List[Path]:
        """List every file and directory under source_dir except the archive."""
        entries = []
        for root, dirs, files in os.walk(source_dir):
            dirs.sort()
            root_path = Path(root)
            for name in dirs:
                entries.append(root_path / name)
            for name in sorted(files):
                path = root_path / name
                if path != archive_path:
                    entries.append(path)
        return entries
