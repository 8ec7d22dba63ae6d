"""
Domain exceptions for the billing back office.

Every error carries a machine-readable code and a details dict so the API
layer can render it without knowing the concrete type.
"""

from typing import Any


class BillingError(Exception):
    """Base exception for all billing errors."""

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
class StorageError(BillingError):
    """Base exception for storage operations."""

    pass


class InvoiceNotFoundError(StorageError):
    """Invoice not found in storage."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class QuotationNotFoundError(StorageError):
    """Quotation not found in storage."""

    def __init__(self, quotation_id: int):
        super().__init__(
            f"Quotation not found: {quotation_id}",
            code="QUOTATION_NOT_FOUND",
            details={"quotation_id": quotation_id},
        )


class PaymentNotFoundError(StorageError):
    """Payment not found in storage."""

    def __init__(self, payment_id: int):
        super().__init__(
            f"Payment not found: {payment_id}",
            code="PAYMENT_NOT_FOUND",
            details={"payment_id": payment_id},
        )


class ClientNotFoundError(StorageError):
    """Client not found in storage."""

    def __init__(self, client_id: int):
        super().__init__(
            f"Client not found: {client_id}",
            code="CLIENT_NOT_FOUND",
            details={"client_id": client_id},
        )


class DuplicateDocumentNumberError(StorageError):
    """A quotation or invoice with the same number already exists."""

    def __init__(self, document_type: str, number: str):
        super().__init__(
            f"{document_type.capitalize()} number already exists: {number}",
            code="DUPLICATE_DOCUMENT_NUMBER",
            details={"document_type": document_type, "number": number},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Sequencing Exceptions
class SequenceError(BillingError):
    """Base exception for document number sequencing."""

    pass


class SequenceNotFoundError(SequenceError):
    """No sequence row is configured for the region."""

    def __init__(self, region: str):
        super().__init__(
            f"No document sequence configured for region: {region}",
            code="SEQUENCE_NOT_FOUND",
            details={"region": region},
        )


class SequenceIssueError(SequenceError):
    """The next number could not be durably issued; nothing was handed out."""

    def __init__(self, region: str, reason: str):
        super().__init__(
            f"Could not issue document number for {region}: {reason}",
            code="SEQUENCE_ISSUE_FAILED",
            details={"region": region, "reason": reason},
        )


# Validation Exceptions
class ValidationError(BillingError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidLineItemError(ValidationError):
    """A line item breaks the two-level item structure."""

    def __init__(self, message: str, serial_no: int | None = None):
        super().__init__(field="items", message=message, value=serial_no)
        self.code = "INVALID_LINE_ITEM"


class InvalidPaymentError(ValidationError):
    """Payment amount or target is not acceptable."""

    def __init__(self, message: str, amount: float | None = None):
        super().__init__(field="amount", message=message, value=amount)
        self.code = "INVALID_PAYMENT"


class ConfigurationError(BillingError):
    """Configuration error."""

    pass
