"""Exception taxonomy mapped onto the response envelope by the web layer."""

from __future__ import annotations


class RealEstateError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code: int = 500
    default_message: str = "An internal server error occurred"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors or [])
        super().__init__(self.message)


class RequestValidationFailed(RealEstateError):
    """Malformed input; carries field-level messages in ``errors``."""

    status_code = 400
    default_message = "Invalid request data"


class NotFoundError(RealEstateError):
    """Referenced record is absent, disabled, or its id is malformed."""

    status_code = 404
    default_message = "Resource not found"


class OwnerNotFoundError(RealEstateError):
    """A write referenced an owner that does not exist."""

    status_code = 400
    default_message = "Owner not found"


class StorageError(RealEstateError):
    """The record store failed; details are logged, never returned."""

    status_code = 500
    default_message = "Storage error"
