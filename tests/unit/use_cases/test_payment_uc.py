"""Tests for the payment use cases."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import RecordPaymentRequest, UpdatePaymentRequest
from src.application.use_cases import (
    DeletePaymentUseCase,
    RecordPaymentUseCase,
    UpdatePaymentUseCase,
)
from src.core.entities import Invoice, Payment, PaymentMode, Region
from src.core.exceptions import InvoiceNotFoundError, PaymentNotFoundError


def _invoice(amount_paid: float) -> Invoice:
    return Invoice(
        id=1,
        invoice_number="UAE-INV-0001",
        client_id=1,
        region=Region.UAE,
        total_amount=1000.0,
        net_amount=952.38,
        vat_amount=47.62,
        amount_paid=amount_paid,
    )


@pytest.fixture
def mock_payment_store():
    store = AsyncMock()

    async def create_pmt(pmt):
        pmt.id = 10
        pmt.region = Region.UAE
        return pmt

    store.create_payment.side_effect = create_pmt
    store.update_payment.side_effect = lambda pmt: pmt
    return store


@pytest.fixture
def mock_invoice_store():
    return AsyncMock()


class TestRecordPaymentUseCase:
    async def test_records_and_returns_new_balance(self, mock_payment_store, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(400.0)
        use_case = RecordPaymentUseCase(mock_payment_store, mock_invoice_store)

        result = await use_case.execute(
            RecordPaymentRequest(invoice_id=1, amount=400.0, payment_date=date(2024, 5, 2))
        )
        response = use_case.to_response(result)

        assert result.payment.id == 10
        assert response.invoice_amount_paid == 400.0
        assert response.invoice_balance == 600.0
        assert response.region == "UAE"

    async def test_overpayment_is_allowed(self, mock_payment_store, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(1200.0)
        use_case = RecordPaymentUseCase(mock_payment_store, mock_invoice_store)
        result = await use_case.execute(RecordPaymentRequest(invoice_id=1, amount=1200.0))
        assert result.invoice.balance == -200.0

    async def test_unknown_invoice_propagates(self, mock_payment_store, mock_invoice_store):
        mock_payment_store.create_payment.side_effect = InvoiceNotFoundError(9)
        use_case = RecordPaymentUseCase(mock_payment_store, mock_invoice_store)
        with pytest.raises(InvoiceNotFoundError):
            await use_case.execute(RecordPaymentRequest(invoice_id=9, amount=10.0))
        mock_invoice_store.get_invoice.assert_not_awaited()


class TestUpdatePaymentUseCase:
    async def test_merges_changes(self, mock_payment_store, mock_invoice_store):
        mock_payment_store.get_payment.return_value = Payment(
            id=10,
            invoice_id=1,
            region=Region.UAE,
            amount=400.0,
            payment_date=date(2024, 5, 2),
            payment_mode=PaymentMode.CHEQUE,
            reference_number="CHQ-881",
        )
        mock_invoice_store.get_invoice.return_value = _invoice(500.0)
        use_case = UpdatePaymentUseCase(mock_payment_store, mock_invoice_store)

        result = await use_case.execute(10, UpdatePaymentRequest(amount=500.0))

        stored = mock_payment_store.update_payment.await_args.args[0]
        assert stored.amount == 500.0
        assert stored.payment_mode == PaymentMode.CHEQUE
        assert stored.reference_number == "CHQ-881"
        assert result.invoice.balance == 500.0

    async def test_missing_payment(self, mock_payment_store, mock_invoice_store):
        mock_payment_store.get_payment.return_value = None
        use_case = UpdatePaymentUseCase(mock_payment_store, mock_invoice_store)
        with pytest.raises(PaymentNotFoundError):
            await use_case.execute(99, UpdatePaymentRequest(amount=1.0))


class TestDeletePaymentUseCase:
    async def test_returns_removed_payment(self, mock_payment_store, mock_invoice_store):
        mock_payment_store.delete_payment.return_value = Payment(
            id=10, invoice_id=1, region=Region.UAE, amount=600.0
        )
        mock_invoice_store.get_invoice.return_value = _invoice(400.0)
        use_case = DeletePaymentUseCase(mock_payment_store, mock_invoice_store)

        response = use_case.to_response(await use_case.execute(10))

        assert response.amount == 600.0
        assert response.invoice_balance == 600.0

    async def test_missing_payment(self, mock_payment_store, mock_invoice_store):
        mock_payment_store.delete_payment.side_effect = PaymentNotFoundError(99)
        use_case = DeletePaymentUseCase(mock_payment_store, mock_invoice_store)
        with pytest.raises(PaymentNotFoundError):
            await use_case.execute(99)
