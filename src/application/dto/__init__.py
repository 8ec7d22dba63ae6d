"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CreateClientRequest,
    CreateInvoiceRequest,
    CreateQuotationRequest,
    LineItemRequest,
    RecordPaymentRequest,
    SubItemRequest,
    UpdateInvoiceRequest,
    UpdatePaymentRequest,
    UpdateQuotationRequest,
)
from src.application.dto.responses import (
    ClientListResponse,
    ClientResponse,
    ComponentHealthResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceListResponse,
    InvoiceResponse,
    LedgerEntryResponse,
    LedgerResponse,
    LineItemResponse,
    PaginatedResponse,
    PaymentListResponse,
    PaymentResponse,
    QuotationListResponse,
    QuotationResponse,
    SequencePreviewResponse,
    SubItemResponse,
)

__all__ = [
    # Requests
    "CreateClientRequest",
    "CreateInvoiceRequest",
    "CreateQuotationRequest",
    "LineItemRequest",
    "RecordPaymentRequest",
    "SubItemRequest",
    "UpdateInvoiceRequest",
    "UpdatePaymentRequest",
    "UpdateQuotationRequest",
    # Responses
    "ClientListResponse",
    "ClientResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "InvoiceListResponse",
    "InvoiceResponse",
    "LedgerEntryResponse",
    "LedgerResponse",
    "LineItemResponse",
    "PaginatedResponse",
    "PaymentListResponse",
    "PaymentResponse",
    "QuotationListResponse",
    "QuotationResponse",
    "SequencePreviewResponse",
    "SubItemResponse",
]
