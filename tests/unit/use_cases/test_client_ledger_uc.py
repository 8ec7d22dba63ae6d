"""Tests for BuildClientLedgerUseCase and ExportInvoicesUseCase."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.application.use_cases import BuildClientLedgerUseCase, ExportInvoicesUseCase
from src.core.entities import Invoice, Payment, Region
from src.core.exceptions import ClientNotFoundError, ValidationError


def _invoice(invoice_id: int, total: float, day: date) -> Invoice:
    return Invoice(
        id=invoice_id,
        invoice_number=f"UAE-INV-{invoice_id:04d}",
        client_id=1,
        region=Region.UAE,
        invoice_date=day,
        total_amount=total,
    )


@pytest.fixture
def stores(sample_client):
    client_store = AsyncMock()
    client_store.get_client.return_value = sample_client
    invoice_store = AsyncMock()
    # Store returns newest first
    invoice_store.list_invoices.return_value = [
        _invoice(2, 500.0, date(2024, 5, 2)),
        _invoice(1, 1000.0, date(2024, 5, 1)),
    ]
    payment_store = AsyncMock()
    payment_store.list_payments.return_value = [
        Payment(id=1, invoice_id=1, amount=400.0, payment_date=date(2024, 5, 2)),
    ]
    return client_store, invoice_store, payment_store


class TestBuildClientLedgerUseCase:
    async def test_builds_chronological_ledger(self, stores):
        use_case = BuildClientLedgerUseCase(*stores)
        result = await use_case.execute(1)

        ledger = result.ledger
        assert [e.reference_label for e in ledger.entries] == [
            "UAE-INV-0001",
            "UAE-INV-0002",
            "UAE-INV-0001",
        ]
        assert ledger.closing_balance == 1100.0

    async def test_payments_loaded_for_client_invoices(self, stores):
        _, _, payment_store = stores
        use_case = BuildClientLedgerUseCase(*stores)
        await use_case.execute(1, date(2024, 5, 1), date(2024, 5, 31))

        kwargs = payment_store.list_payments.await_args.kwargs
        assert sorted(kwargs["invoice_ids"]) == [1, 2]
        assert kwargs["from_date"] == date(2024, 5, 1)
        assert kwargs["to_date"] == date(2024, 5, 31)

    async def test_no_invoices_skips_payment_lookup(self, stores):
        _, invoice_store, payment_store = stores
        invoice_store.list_invoices.return_value = []
        use_case = BuildClientLedgerUseCase(*stores)
        result = await use_case.execute(1)
        assert result.ledger.entries == []
        payment_store.list_payments.assert_not_awaited()

    async def test_inverted_window_rejected(self, stores):
        use_case = BuildClientLedgerUseCase(*stores)
        with pytest.raises(ValidationError):
            await use_case.execute(1, date(2024, 6, 1), date(2024, 5, 1))

    async def test_unknown_client(self, stores):
        client_store, _, _ = stores
        client_store.get_client.return_value = None
        use_case = BuildClientLedgerUseCase(*stores)
        with pytest.raises(ClientNotFoundError):
            await use_case.execute(404)

    async def test_response_and_csv(self, stores):
        use_case = BuildClientLedgerUseCase(*stores)
        result = await use_case.execute(1)

        response = use_case.to_response(result)
        assert response.client_name == "Gulf Events LLC"
        assert response.currency == "AED"
        assert response.formatted_closing_balance == "1,100.00 AED"

        content = use_case.to_csv(result)
        assert content.startswith("Date,Particulars,INV Type,INV No.,Debit (AED),Credit (AED)")
        assert "Closing Balance,,1100.00" in content


class TestExportInvoicesUseCase:
    async def test_export_with_client_names(self, stores):
        client_store, invoice_store, _ = stores
        use_case = ExportInvoicesUseCase(invoice_store, client_store)

        result = await use_case.execute(region="UAE")

        assert result.count == 2
        assert result.filename.startswith("invoices_")
        assert result.filename.endswith(".csv")
        assert "Gulf Events LLC" in result.content
        assert invoice_store.list_invoices.await_args.kwargs["region"] == "UAE"
        client_store.get_client.assert_awaited_once_with(1)
