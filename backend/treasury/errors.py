"""
Error Taxonomy — Exceptions raised by services and converted to
JSON ``{"message": ...}`` responses by the handlers in ``treasury.main``.
"""


class TreasuryError(Exception):
    """Base class for every error that maps onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TreasuryError):
    """Malformed or missing input."""

    status_code = 400


class UploadError(ValidationError):
    """Rejected proof file (type or size)."""


class ConflictError(TreasuryError):
    """Duplicate submission. Kept at 400 for client compatibility."""

    status_code = 400


class AuthError(TreasuryError):
    """Missing, invalid, or expired credential."""

    status_code = 401


class NotFoundError(TreasuryError):
    status_code = 404


class InternalError(TreasuryError):
    status_code = 500
