"""Archivers package."""

from infrastructure.archive.base import BaseArchiver
from infrastructure.archive.zip_command import ZipCommandArchiver
from infrastructure.archive.native import ZipfileArchiver

__all__ = [
    "BaseArchiver",
    "ZipCommandArchiver",
    "ZipfileArchiver",
]
