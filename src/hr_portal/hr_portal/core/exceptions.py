from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when settings are missing or inconsistent."""


class StoreError(DomainError):
    """Raised by a collection store when the backend rejects an operation.

    Args:
        message: Backend error message (kept verbatim, it is parsed for column names).
        status_code: HTTP status code, when the backend speaks HTTP.
        code: Backend error code (Postgres SQLSTATE, MySQL errno, ...).
        details: Any extra payload returned with the error.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


class NotFoundError(DomainError):
    """Raised when a collection or record does not exist."""
