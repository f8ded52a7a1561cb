# app/domain/errors.py


class StoreError(Exception):
    """Base class for errors raised by stores and services."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(StoreError):
    """Missing or malformed input, or a forbidden state change."""

    status_code = 400


class NotFound(StoreError):
    status_code = 404


class StorageFailure(StoreError):
    """I/O or query failure in a persistence backend. Never retried."""

    status_code = 500
