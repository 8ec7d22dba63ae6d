"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

import datetime as dt
from datetime import date, datetime

from pydantic import BaseModel, Field


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Clients ---


class ClientResponse(BaseModel):
    """Client in response."""

    id: int
    name: str
    region: str
    currency: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    trn: str | None = None
    created_at: datetime | None = None


class ClientListResponse(BaseModel):
    """List of clients."""

    clients: list[ClientResponse]
    total: int


# --- Line items ---


class SubItemResponse(BaseModel):
    """Sub-item in a document response."""

    label: str = Field(..., description="Display label, e.g. 3.1")
    description: str
    size: str | None = None
    quantity: float
    rate: float
    amount: float


class LineItemResponse(BaseModel):
    """Top-level line item in a document response."""

    serial_no: int
    description: str
    size: str | None = None
    quantity: float
    rate: float
    amount: float
    sub_items: list[SubItemResponse] = Field(default_factory=list)


# --- Invoices ---


class InvoiceResponse(BaseModel):
    """Tax invoice response."""

    id: int
    invoice_number: str
    client_id: int
    region: str
    currency: str
    event_id: int | None = None
    invoice_date: date
    status: str
    notes: str | None = None
    items: list[LineItemResponse] = Field(default_factory=list)
    net_amount: float
    vat_amount: float
    total_amount: float
    amount_paid: float
    balance: float
    amount_in_words: str
    formatted_total: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InvoiceListResponse(PaginatedResponse):
    """Page of invoice headers."""

    invoices: list[InvoiceResponse]


# --- Quotations ---


class QuotationResponse(BaseModel):
    """Quotation response."""

    id: int
    quotation_number: str
    client_id: int
    region: str
    currency: str
    event_id: int | None = None
    quotation_date: date
    status: str
    notes: str | None = None
    items: list[LineItemResponse] = Field(default_factory=list)
    net_amount: float
    vat_amount: float
    total_amount: float
    amount_in_words: str
    formatted_total: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class QuotationListResponse(PaginatedResponse):
    """Page of quotation headers."""

    quotations: list[QuotationResponse]


# --- Payments ---


class PaymentResponse(BaseModel):
    """Payment response, with the owning invoice's balance after the change."""

    id: int
    invoice_id: int
    region: str | None = None
    amount: float
    payment_date: date
    payment_mode: str
    reference_number: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    invoice_amount_paid: float | None = None
    invoice_balance: float | None = None


class PaymentListResponse(BaseModel):
    """List of payments."""

    payments: list[PaymentResponse]
    total: int


# --- Ledger ---


class LedgerEntryResponse(BaseModel):
    """One line of a statement of account."""

    date: dt.date
    kind: str
    reference_label: str
    particulars: str
    debit: float
    credit: float
    balance: float


class LedgerResponse(BaseModel):
    """Client statement of account."""

    client_id: int
    client_name: str
    currency: str
    from_date: date | None = None
    to_date: date | None = None
    entries: list[LedgerEntryResponse]
    total_debit: float
    total_credit: float
    closing_balance: float
    formatted_closing_balance: str


# --- Sequences ---


class SequencePreviewResponse(BaseModel):
    """Current state of a region's invoice numbering."""

    region: str
    prefix: str
    current_number: int
    next_number: str


# --- Health / errors ---


class ComponentHealthResponse(BaseModel):
    """Health of a backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVOICE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
