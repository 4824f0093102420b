"""Domain exceptions for the archive job pipeline."""

from typing import Optional


class DomainException(Exception):
    """Base exception for all domain errors."""
    pass


class AuthenticationFailed(DomainException):
    """Raised when the invocation token does not match the expected secret."""
    pass


class InvalidJobPayload(DomainException):
    """Raised when the job payload is missing required fields."""
    pass


class MalformedAddress(DomainException):
    """Raised when an object address has no bucket/key separator."""
    pass


class NameCollision(DomainException):
    """Raised when two sources would land on the same scratch file."""
    pass


class ScratchSpaceUnavailable(DomainException):
    """Raised when the job scratch directory cannot be created."""
    pass


class SourceUnavailable(DomainException):
    """Raised when a source object metadata lookup fails."""
    pass


class SourceTooLarge(SourceUnavailable):
    """Raised when a configured source size limit is exceeded."""
    pass


class DownloadFailed(DomainException):
    """Raised when any source download fails."""
    pass


class ArchiveFailed(DomainException):
    """Raised when the archiving process exits non-zero."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class ArchiveStatUnavailable(DomainException):
    """Raised when the produced archive cannot be stat'ed."""
    pass


class UploadFailed(DomainException):
    """Raised when the archive upload fails."""
    pass


class NotificationFailed(DomainException):
    """Raised by a notification strategy; never escapes the notifier."""
    pass


class ConfigurationError(DomainException):
    """Raised when configuration is invalid."""
    pass


class JobFailed(DomainException):
    """Signals overall job failure to the host."""
    pass
