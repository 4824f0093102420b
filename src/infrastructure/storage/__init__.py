"""Storage infrastructure."""

from infrastructure.storage.s3_client import S3ObjectStore
from infrastructure.storage.scratch_space import ScratchSpace

__all__ = ['S3ObjectStore', 'ScratchSpace']
