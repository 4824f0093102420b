"""Archiver that shells out to the ``zip`` command line tool."""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from domain.exceptions import ArchiveFailed
from infrastructure.archive.base import BaseArchiver

# Exit status shells use for "command not found"
COMMAND_NOT_FOUND = 127


class ZipCommandArchiver(BaseArchiver):
    """
    Runs ``zip -r <archive_name> ./`` inside the source directory.

    zip leaves its own output file out of the archive. stdout and stderr are
    captured and logged line by line.
    """

    binary = 'zip'

    def __init__(self, timeout: Optional[float] = None):
        super().__init__()
        self.timeout = timeout

    @classmethod
    def is_available(cls) -> bool:
        return shutil.which(cls.binary) is not None

    def _execute_archiving(self, source_dir: Path, archive_name: str) -> None:
        cmd = [self.binary, '-r', archive_name, './']
        self._logger.debug(f"Running {' '.join(cmd)} in {source_dir}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(source_dir),
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise ArchiveFailed(f"{self.binary} not found: {e}", exit_code=COMMAND_NOT_FOUND) from e
        except subprocess.TimeoutExpired as e:
            raise ArchiveFailed(f"{self.binary} timed out after {self.timeout}s") from e

        self._log_output(result.stdout)
        self._log_output(result.stderr)

        if result.returncode != 0:
            self._logger.error(
                f"Error creating compressed file - {self.binary} exited with code {result.returncode}"
            )
            raise ArchiveFailed(
                f"{self.binary} exited with code: {result.returncode}",
                exit_code=result.returncode
            )

    def _log_output(self, output: Optional[str]) -> None:
        for line in (output or '').splitlines():
            line = line.strip()
            if line:
                self._logger.info(line)
