"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores

Use cases are the only entry point for API handlers that change data.
"""

from src.application.dto.requests import (
    CreateClientRequest,
    CreateInvoiceRequest,
    CreateQuotationRequest,
    RecordPaymentRequest,
    UpdateInvoiceRequest,
    UpdatePaymentRequest,
    UpdateQuotationRequest,
)
from src.application.dto.responses import (
    ClientResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceResponse,
    LedgerResponse,
    PaymentResponse,
    QuotationResponse,
)
from src.application.use_cases import (
    BuildClientLedgerUseCase,
    CreateInvoiceUseCase,
    CreateQuotationUseCase,
    DeletePaymentUseCase,
    ExportInvoicesUseCase,
    RecordPaymentUseCase,
    UpdateInvoiceUseCase,
    UpdatePaymentUseCase,
    UpdateQuotationUseCase,
)

__all__ = [
    # Request DTOs
    "CreateClientRequest",
    "CreateInvoiceRequest",
    "UpdateInvoiceRequest",
    "CreateQuotationRequest",
    "UpdateQuotationRequest",
    "RecordPaymentRequest",
    "UpdatePaymentRequest",
    # Response DTOs
    "ClientResponse",
    "InvoiceResponse",
    "QuotationResponse",
    "PaymentResponse",
    "LedgerResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "CreateInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "CreateQuotationUseCase",
    "UpdateQuotationUseCase",
    "RecordPaymentUseCase",
    "UpdatePaymentUseCase",
    "DeletePaymentUseCase",
    "BuildClientLedgerUseCase",
    "ExportInvoicesUseCase",
]
