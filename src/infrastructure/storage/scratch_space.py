"""Scratch directory management."""

import shutil
from pathlib import Path
from typing import Optional

from domain.exceptions import ScratchSpaceUnavailable
from shared.logging import get_logger
from shared.types import PathLike

logger = get_logger(__name__)


class ScratchSpace:
    """
    Creates the per-invocation working directory for a job.
    Implements IScratchSpace protocol.

    Under an ephemeral host the directory is named after the invocation id
    (``<base>/<invocation id>``); long-lived hosts without an invocation id
    get a fixed ``<base>/<local_name>`` path. An existing directory is never
    reused.
    """

    def __init__(self, base_dir: PathLike, local_name: str = "files"):
        """
        Initialize scratch space manager.

        Args:
            base_dir: Directory under which scratch directories are created
            local_name: Directory name used when there is no invocation id
        """
        self.base_dir = Path(base_dir)
        self.local_name = local_name
        self._logger = get_logger(__name__)

    def path_for(self, invocation_id: Optional[str] = None) -> Path:
        return self.base_dir / (invocation_id or self.local_name)

    def create(self, invocation_id: Optional[str] = None) -> Path:
        """
        Create a fresh scratch directory.

        Args:
            invocation_id: Request id of the ephemeral host, if any

        Returns:
            Path to created directory

        Raises:
            ScratchSpaceUnavailable: If the directory exists or cannot be created
        """
        scratch_dir = self.path_for(invocation_id)
        self._logger.info(f"Creating scratch directory at {scratch_dir}")

        try:
            scratch_dir.mkdir(parents=False, exist_ok=False)
        except FileExistsError as e:
            raise ScratchSpaceUnavailable(f"Scratch directory already exists: {scratch_dir}") from e
        except OSError as e:
            raise ScratchSpaceUnavailable(f"Cannot create scratch directory {scratch_dir}: {e}") from e

        self._logger.info("Scratch directory created")
        return scratch_dir

    def cleanup(self, scratch_dir: Path) -> None:
        """
        Remove a scratch directory and everything in it.

        Failures are logged; they never fail the job.
        """
        if not scratch_dir.exists():
            return

        try:
            shutil.rmtree(scratch_dir)
            self._logger.info(f"Cleaned up scratch directory: {scratch_dir}")
        except OSError as e:
            self._logger.error(f"Failed to cleanup scratch directory {scratch_dir}: {e}")
