"""
Domain exceptions for the movie catalog.

Closed set of error kinds. Every error raised by the search gateway, the
favorites store or the catalog service is a CatalogError tagged with an
ErrorKind, so callers branch on ``err.kind`` rather than on message text.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    EXTERNAL_TIMEOUT = "external_timeout"
    INVALID_CREDENTIAL = "invalid_credential"
    EXTERNAL_FAILURE = "external_failure"
    STORAGE_FAILURE = "storage_failure"


class CatalogError(Exception):
    """Base class for all catalog errors"""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "Catalog operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Bad caller input (empty title, non-positive page, ...)"""
    kind = ErrorKind.VALIDATION
    default_message = "Invalid input"


class DuplicateError(CatalogError):
    kind = ErrorKind.DUPLICATE

    def __init__(self, imdb_id: str):
        self.imdb_id = imdb_id
        super().__init__(f'Movie with ID "{imdb_id}" already exists in favorites')


class NotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, imdb_id: str):
        self.imdb_id = imdb_id
        super().__init__(f'Movie with ID "{imdb_id}" not found in favorites')


class ExternalTimeout(CatalogError):
    """Search provider unreachable or too slow"""
    kind = ErrorKind.EXTERNAL_TIMEOUT
    default_message = "External API request timed out"


class InvalidCredential(CatalogError):
    """Search provider rejected the configured API key"""
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "Invalid API key configured"


class ExternalFailure(CatalogError):
    kind = ErrorKind.EXTERNAL_FAILURE
    default_message = "External API request failed"


class StorageFailure(CatalogError):
    """The favorites file could not be read or written"""
    kind = ErrorKind.STORAGE_FAILURE
    default_message = "Storage operation failed"


class MissingCredentialError(RuntimeError):
    """Raised at startup when no provider API key is configured."""
