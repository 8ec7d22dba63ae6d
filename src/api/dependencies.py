"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Tests replace
these through ``app.dependency_overrides``.
"""

from functools import lru_cache

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
from src.config import Settings, get_settings
from src.core.interfaces import (
    IClientStore,
    IDocumentSequencer,
    IInvoiceStore,
    IPaymentStore,
    IQuotationStore,
)
from src.infrastructure.storage.sqlite import (
    get_client_store,
    get_invoice_store,
    get_payment_store,
    get_quotation_store,
    get_sequencer,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_clients() -> IClientStore:
    """Get client store."""
    return await get_client_store()


async def get_invoices() -> IInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


async def get_quotations() -> IQuotationStore:
    """Get quotation store."""
    return await get_quotation_store()


async def get_payments() -> IPaymentStore:
    """Get payment store."""
    return await get_payment_store()


async def get_document_sequencer() -> IDocumentSequencer:
    """Get invoice number sequencer."""
    return await get_sequencer()


# Use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_update_invoice_use_case() -> UpdateInvoiceUseCase:
    """Get update invoice use case."""
    return UpdateInvoiceUseCase()


def get_export_invoices_use_case() -> ExportInvoicesUseCase:
    """Get invoice export use case."""
    return ExportInvoicesUseCase()


def get_create_quotation_use_case() -> CreateQuotationUseCase:
    """Get create quotation use case."""
    return CreateQuotationUseCase()


def get_update_quotation_use_case() -> UpdateQuotationUseCase:
    """Get update quotation use case."""
    return UpdateQuotationUseCase()


def get_record_payment_use_case() -> RecordPaymentUseCase:
    """Get record payment use case."""
    return RecordPaymentUseCase()


def get_update_payment_use_case() -> UpdatePaymentUseCase:
    """Get update payment use case."""
    return UpdatePaymentUseCase()


def get_delete_payment_use_case() -> DeletePaymentUseCase:
    """Get delete payment use case."""
    return DeletePaymentUseCase()


def get_client_ledger_use_case() -> BuildClientLedgerUseCase:
    """Get client ledger use case."""
    return BuildClientLedgerUseCase()
