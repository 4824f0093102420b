"""Infrastructure layer package."""

from infrastructure.config import ConfigLoader, RuntimeConfig
from infrastructure.storage import S3ObjectStore, ScratchSpace
from infrastructure.io import ArchiveUploader, HeaderValidator, ObjectDownloader, SizeReporter
from infrastructure.archive import ZipCommandArchiver, ZipfileArchiver
from infrastructure.notifications import HttpNotification, NotificationRegistry, Notifier

__all__ = [
    "ConfigLoader",
    "RuntimeConfig",
    "S3ObjectStore",
    "ScratchSpace",
    "ArchiveUploader",
    "HeaderValidator",
    "ObjectDownloader",
    "SizeReporter",
    "ZipCommandArchiver",
    "ZipfileArchiver",
    "HttpNotification",
    "NotificationRegistry",
    "Notifier",
]
