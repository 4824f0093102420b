"""IO stages package."""

from infrastructure.io.validator import HeaderValidator
from infrastructure.io.downloader import ObjectDownloader
from infrastructure.io.size_reporter import SizeReporter, compression_ratio
from infrastructure.io.uploader import ArchiveUploader, UploadProgress

__all__ = [
    "HeaderValidator",
    "ObjectDownloader",
    "SizeReporter",
    "compression_ratio",
    "ArchiveUploader",
    "UploadProgress",
]
