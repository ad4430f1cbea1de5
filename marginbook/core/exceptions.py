"""
Domain exceptions for the MarginBook application.

Provides specific exception types for different error scenarios.
Numeric edge cases in the calculators are never errors.
"""

from typing import Any


class MarginBookError(Exception):
    """Base exception for all MarginBook errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(MarginBookError):
    """Base exception for storage operations."""

    pass


class RecordNotFoundError(StorageError):
    """
    Record missing, or owned by another user.

    Both cases raise the same error so existence never leaks across owners.
    """

    def __init__(self, kind: str, record_id: str, code: str = "RECORD_NOT_FOUND"):
        super().__init__(
            f"{kind.capitalize()} not found: {record_id}",
            code=code,
            details={"kind": kind, "record_id": record_id},
        )


class ReceiptNotFoundError(RecordNotFoundError):
    """Receipt not found for the current user."""

    def __init__(self, receipt_id: str):
        super().__init__("receipt", receipt_id, code="RECEIPT_NOT_FOUND")


class InvoiceNotFoundError(RecordNotFoundError):
    """Invoice not found for the current user."""

    def __init__(self, invoice_id: str):
        super().__init__("invoice", invoice_id, code="INVOICE_NOT_FOUND")


class UserNotFoundError(RecordNotFoundError):
    """User not found."""

    def __init__(self, user_id: str):
        super().__init__("user", user_id, code="USER_NOT_FOUND")


class DuplicateUserError(StorageError):
    """A user with this email already exists."""

    def __init__(self, email: str):
        super().__init__(
            f"User already exists: {email}",
            code="DUPLICATE_USER",
            details={"email": email},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Sequence Exceptions
class SequenceError(MarginBookError):
    """Base exception for per-user sequence numbering."""

    pass


class SequenceConflictError(SequenceError):
    """Two writers computed the same next number; the later insert lost."""

    def __init__(self, kind: str, user_id: str, number: int | None = None):
        super().__init__(
            f"Sequence number conflict for {kind} of user {user_id}"
            + (f" at {number}" if number is not None else ""),
            code="SEQUENCE_CONFLICT",
            details={"kind": kind, "user_id": user_id, "number": number},
        )


class SequenceExhaustedError(SequenceError):
    """Retries ran out while assigning a sequence number. Safe to retry."""

    def __init__(self, kind: str, user_id: str, attempts: int):
        super().__init__(
            f"Could not assign a {kind} number after {attempts} attempts",
            code="SEQUENCE_EXHAUSTED",
            details={"kind": kind, "user_id": user_id, "attempts": attempts},
        )


# Validation Exceptions
class ValidationError(MarginBookError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class UnsupportedSchemaVersionError(ValidationError):
    """Saved calculation state uses a schema version this build cannot read."""

    def __init__(self, version: Any, supported: list[int]):
        super().__init__(
            field="schema_version",
            message=f"Unsupported schema version {version!r}. Supported: {supported}",
            value=version,
        )
        self.code = "UNSUPPORTED_SCHEMA_VERSION"
        self.details["supported"] = supported


# Auth Exceptions
class AuthenticationError(MarginBookError):
    """Missing, malformed, expired or unknown bearer token."""

    def __init__(self, reason: str = "Authentication required"):
        super().__init__(reason, code="AUTHENTICATION_REQUIRED", details={"reason": reason})


class ConfigurationError(MarginBookError):
    """Configuration error."""

    pass
