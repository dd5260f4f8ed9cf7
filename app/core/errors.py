# app/core/errors.py
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    REQUEST_VALIDATION = "request_validation"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    STORAGE = "storage"
    CONNECTION = "connection"
    INTERNAL = "internal"


class AppError(Exception):
    """
    Base class for every failure the API layer knows how to report.

    `message` is for logs. `detail` is what a client may see; subclasses that
    wrap engine errors keep it generic so driver internals never leave the server.
    """
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail if detail is not None else message


class ValidationError(AppError):
    """A required field is missing or empty."""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class StorageError(AppError):
    """The storage engine rejected or failed an operation."""
    kind = ErrorKind.STORAGE

    def __init__(self, message: str, detail: str = "A storage error occurred."):
        super().__init__(message, detail)


class ConstraintViolationError(StorageError):
    """A write broke a primary key or unique constraint."""
    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, detail: str = "A record with the same id or email already exists."):
        super().__init__(message, detail)


class StoreConnectionError(AppError):
    """The database could not be reached. Fatal at startup."""
    kind = ErrorKind.CONNECTION

    def __init__(self, message: str, detail: str = "The database is unavailable."):
        super().__init__(message, detail)


class AuthenticationError(AppError):
    kind = ErrorKind.UNAUTHORIZED
