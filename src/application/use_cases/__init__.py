"""Application use cases."""

from src.application.use_cases.build_client_ledger import BuildClientLedgerUseCase, LedgerResult
from src.application.use_cases.create_invoice import CreateInvoiceResult, CreateInvoiceUseCase
from src.application.use_cases.create_quotation import (
    CreateQuotationResult,
    CreateQuotationUseCase,
)
from src.application.use_cases.delete_payment import DeletePaymentUseCase
from src.application.use_cases.export_invoices import ExportInvoicesUseCase, InvoiceExportResult
from src.application.use_cases.record_payment import PaymentResult, RecordPaymentUseCase
from src.application.use_cases.update_invoice import UpdateInvoiceResult, UpdateInvoiceUseCase
from src.application.use_cases.update_payment import UpdatePaymentUseCase
from src.application.use_cases.update_quotation import (
    UpdateQuotationResult,
    UpdateQuotationUseCase,
)

__all__ = [
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "UpdateInvoiceUseCase",
    "UpdateInvoiceResult",
    "CreateQuotationUseCase",
    "CreateQuotationResult",
    "UpdateQuotationUseCase",
    "UpdateQuotationResult",
    "RecordPaymentUseCase",
    "UpdatePaymentUseCase",
    "DeletePaymentUseCase",
    "PaymentResult",
    "BuildClientLedgerUseCase",
    "LedgerResult",
    "ExportInvoicesUseCase",
    "InvoiceExportResult",
]
