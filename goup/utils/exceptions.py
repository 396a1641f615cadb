"""
Custom exceptions for the goup project
"""
from typing import Optional


class GoupError(Exception):
    """Base exception for all goup-specific errors"""
    # Whether retrying the same install attempt may succeed
    transient = False


class InvalidInputError(GoupError, ValueError):
    """Raised when invalid input is provided"""
    pass

class ConfigValidationError(InvalidInputError):
    """Raised when configuration validation fails"""
    pass

class SecurityError(GoupError):
    """Raised for security-related issues"""
    pass

class PlatformError(GoupError):
    """Raised for platform-specific compatibility issues"""
    pass

class CommandError(GoupError):
    """Raised when an installed binary exits unsuccessfully"""
    pass


class FetchError(GoupError):
    """Base class for errors retrieving an archive"""
    pass

class RequestConstructionError(FetchError):
    """Raised when the request for an archive cannot be built"""
    pass

class InvalidURLError(RequestConstructionError, InvalidInputError):
    """Raised when an invalid URL is provided"""
    pass

class NetworkError(FetchError):
    """Raised when the connection fails or the body is cut short"""
    pass

class FetchCancelledError(NetworkError):
    """Raised when the caller cancels an in-flight download"""
    pass

class ServerError(FetchError):
    """Raised for 5xx responses"""
    transient = True

class FetchTimeoutError(FetchError):
    """Raised when the origin reports that its own fetch timed out"""
    transient = True

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body

class NotFoundError(FetchError):
    """Raised for 404/410 responses"""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body

class FetchDisabledError(FetchError):
    """Raised for 404/410 responses when fetching from origin is disabled"""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body

class UnexpectedStatusError(FetchError):
    """Raised for any status the fetcher does not classify"""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"unexpected status {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason

class ArchiveTooLargeError(FetchError):
    """Raised when the archive exceeds the allowed download size"""
    pass


class ArchiveError(GoupError):
    """Base class for archive decoding errors"""
    pass

class CorruptArchiveError(ArchiveError):
    """Raised when the payload is not a readable zip archive"""
    pass


class ExtractionError(GoupError):
    """Base class for errors placing archive entries on disk"""
    pass

class PathTraversalError(ExtractionError, SecurityError):
    """Raised when an entry would land outside the destination"""

    def __init__(self, entry_name: str, destination: str):
        super().__init__(f"Attempted path traversal in archive: {entry_name!r} escapes {destination}")
        self.entry_name = entry_name
        self.destination = destination

class FilesystemError(ExtractionError):
    """Raised when a filesystem operation fails during installation"""

    def __init__(self, operation: str, path: str, cause: Optional[OSError] = None):
        message = f"{operation} {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.cause = cause


def is_transient(exc: BaseException) -> bool:
    """Return True if the failed attempt may be retried as-is."""
    return bool(getattr(exc, 'transient', False))
