"""Fixtures for API tests: real use cases wired to mocked stores."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import dependencies as deps
from src.api.main import app
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


@pytest.fixture
def mock_client_store(sample_client):
    store = AsyncMock()
    store.get_client.return_value = sample_client
    store.list_clients.return_value = [sample_client]
    return store


@pytest.fixture
def mock_invoice_store(sample_invoice):
    store = AsyncMock()

    async def create_inv(inv):
        inv.id = 1
        inv.invoice_number = "UAE-INV-0001"
        return inv

    store.create_invoice.side_effect = create_inv
    store.update_invoice.side_effect = lambda inv: inv
    store.get_invoice.return_value = sample_invoice
    store.list_invoices.return_value = [sample_invoice]
    store.delete_invoice.return_value = True
    return store


@pytest.fixture
def mock_quotation_store():
    return AsyncMock()


@pytest.fixture
def mock_payment_store():
    store = AsyncMock()
    store.list_payments.return_value = []
    return store


@pytest.fixture
def mock_sequencer():
    return AsyncMock()


@pytest.fixture
async def api_client(
    mock_client_store,
    mock_invoice_store,
    mock_quotation_store,
    mock_payment_store,
    mock_sequencer,
) -> AsyncGenerator[AsyncClient, None]:
    overrides = {
        deps.get_clients: lambda: mock_client_store,
        deps.get_invoices: lambda: mock_invoice_store,
        deps.get_quotations: lambda: mock_quotation_store,
        deps.get_payments: lambda: mock_payment_store,
        deps.get_document_sequencer: lambda: mock_sequencer,
        deps.get_create_invoice_use_case: lambda: CreateInvoiceUseCase(
            mock_invoice_store, mock_client_store
        ),
        deps.get_update_invoice_use_case: lambda: UpdateInvoiceUseCase(
            mock_invoice_store, mock_client_store
        ),
        deps.get_export_invoices_use_case: lambda: ExportInvoicesUseCase(
            mock_invoice_store, mock_client_store
        ),
        deps.get_create_quotation_use_case: lambda: CreateQuotationUseCase(
            mock_quotation_store, mock_client_store
        ),
        deps.get_update_quotation_use_case: lambda: UpdateQuotationUseCase(
            mock_quotation_store, mock_client_store
        ),
        deps.get_record_payment_use_case: lambda: RecordPaymentUseCase(
            mock_payment_store, mock_invoice_store
        ),
        deps.get_update_payment_use_case: lambda: UpdatePaymentUseCase(
            mock_payment_store, mock_invoice_store
        ),
        deps.get_delete_payment_use_case: lambda: DeletePaymentUseCase(
            mock_payment_store, mock_invoice_store
        ),
        deps.get_client_ledger_use_case: lambda: BuildClientLedgerUseCase(
            mock_client_store, mock_invoice_store, mock_payment_store
        ),
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
