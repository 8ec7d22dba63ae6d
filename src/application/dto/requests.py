"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from src.core.entities.common import DocumentStatus, PaymentMode, Region
from src.core.money import (
    MAX_DOCUMENT_TOTAL,
    MAX_QUANTITY,
    MAX_RATE,
    VAT_RATE,
    compute_amount,
    round2,
)


# --- Clients ---


class CreateClientRequest(BaseModel):
    """Request to register a client."""

    name: str = Field(..., min_length=1, description="Client name")
    region: Region = Field(..., description="Billing region", examples=["UAE", "SAUDI"])
    email: str | None = Field(default=None, description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    address: str | None = Field(default=None, description="Billing address")
    trn: str | None = Field(default=None, description="Tax registration number")


# --- Line items ---


class SubItemRequest(BaseModel):
    """A breakdown line under a top-level item. Cannot carry sub-items itself."""

    model_config = {"extra": "forbid"}

    description: str = Field(default="", description="Sub-item description")
    size: str | None = Field(default=None, description="Size / dimensions")
    quantity: float = Field(
        default=1.0, ge=0, le=MAX_QUANTITY, allow_inf_nan=False, description="Quantity"
    )
    rate: float = Field(
        default=0.0, ge=0, le=MAX_RATE, allow_inf_nan=False, description="Unit rate"
    )


class LineItemRequest(BaseModel):
    """A top-level line item. Amounts are computed server-side."""

    description: str = Field(default="", description="Item description")
    size: str | None = Field(default=None, description="Size / dimensions")
    quantity: float = Field(
        default=1.0, ge=0, le=MAX_QUANTITY, allow_inf_nan=False, description="Quantity"
    )
    rate: float = Field(
        default=0.0, ge=0, le=MAX_RATE, allow_inf_nan=False, description="Unit rate"
    )
    sub_items: list[SubItemRequest] = Field(
        default_factory=list, description="Optional one-level breakdown"
    )


ItemList = list[LineItemRequest]


def check_document_total(items: ItemList | None) -> ItemList | None:
    """Reject item lists whose VAT-inclusive total exceeds ``MAX_DOCUMENT_TOTAL``."""
    if not items:
        return items
    net = round2(
        sum(
            compute_amount(line.quantity, line.rate)
            for item in items
            for line in (item, *item.sub_items)
        )
    )
    total = round2(net + round2(net * VAT_RATE))
    if total > MAX_DOCUMENT_TOTAL:
        raise ValueError(f"document total {total:.2f} exceeds {MAX_DOCUMENT_TOTAL:.2f}")
    return items


# --- Invoices ---


class CreateInvoiceRequest(BaseModel):
    """Request to create a tax invoice. The number is issued by the server."""

    client_id: int = Field(..., description="Billed client ID")
    region: Region | None = Field(
        default=None, description="Billing region (defaults to the client's region)"
    )
    event_id: int | None = Field(default=None, description="Related event ID")
    invoice_date: date | None = Field(default=None, description="Invoice date (defaults to today)")
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)
    notes: str | None = Field(default=None, description="Additional notes")
    items: list[LineItemRequest] = Field(default_factory=list, description="Line items")

    @field_validator("items")
    @classmethod
    def items_within_total(cls, items: ItemList | None) -> ItemList | None:
        return check_document_total(items)


class UpdateInvoiceRequest(BaseModel):
    """Request to edit an invoice.

    Omitted fields are kept. When ``items`` is given it replaces the whole
    item list. The invoice number and amount paid are not editable.
    """

    client_id: int | None = None
    event_id: int | None = None
    invoice_date: date | None = None
    status: DocumentStatus | None = None
    notes: str | None = None
    items: list[LineItemRequest] | None = None

    @field_validator("items")
    @classmethod
    def items_within_total(cls, items: ItemList | None) -> ItemList | None:
        return check_document_total(items)


# --- Quotations ---


class CreateQuotationRequest(BaseModel):
    """Request to create a quotation."""

    client_id: int = Field(..., description="Client ID")
    region: Region | None = Field(
        default=None, description="Billing region (defaults to the client's region)"
    )
    quotation_number: str | None = Field(
        default=None,
        description="Quotation number (generated from a timestamp when omitted)",
        examples=["Q-1718000000000"],
    )
    event_id: int | None = None
    quotation_date: date | None = None
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)
    notes: str | None = None
    items: list[LineItemRequest] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def items_within_total(cls, items: ItemList | None) -> ItemList | None:
        return check_document_total(items)


class UpdateQuotationRequest(BaseModel):
    """Request to edit a quotation. Omitted fields are kept."""

    client_id: int | None = None
    quotation_number: str | None = None
    event_id: int | None = None
    quotation_date: date | None = None
    status: DocumentStatus | None = None
    notes: str | None = None
    items: list[LineItemRequest] | None = None

    @field_validator("items")
    @classmethod
    def items_within_total(cls, items: ItemList | None) -> ItemList | None:
        return check_document_total(items)


# --- Payments ---


class RecordPaymentRequest(BaseModel):
    """Request to record a payment against an invoice."""

    invoice_id: int = Field(..., description="Invoice being paid")
    amount: float = Field(
        ..., gt=0, le=MAX_DOCUMENT_TOTAL, allow_inf_nan=False, description="Amount received"
    )
    payment_date: date | None = Field(default=None, description="Defaults to today")
    payment_mode: PaymentMode = Field(default=PaymentMode.BANK_TRANSFER)
    reference_number: str | None = Field(default=None, description="Bank / cheque reference")
    notes: str | None = None


class UpdatePaymentRequest(BaseModel):
    """Request to edit a payment. Omitted fields are kept."""

    invoice_id: int | None = None
    amount: float | None = Field(
        default=None, gt=0, le=MAX_DOCUMENT_TOTAL, allow_inf_nan=False
    )
    payment_date: date | None = None
    payment_mode: PaymentMode | None = None
    reference_number: str | None = None
    notes: str | None = None
