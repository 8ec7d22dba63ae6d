"""API tests for payment endpoints."""

from datetime import date

import pytest
from httpx import AsyncClient

from src.core.entities import Invoice, Payment, PaymentMode, Region
from src.core.exceptions import InvoiceNotFoundError, PaymentNotFoundError


@pytest.fixture
def paid_invoice():
    return Invoice(
        id=1,
        invoice_number="UAE-INV-0001",
        client_id=1,
        region=Region.UAE,
        total_amount=1000.0,
        amount_paid=400.0,
    )


@pytest.fixture
def recorded_payment():
    return Payment(
        id=5,
        invoice_id=1,
        region=Region.UAE,
        amount=400.0,
        payment_date=date(2024, 5, 2),
        payment_mode=PaymentMode.CHEQUE,
    )


class TestPaymentsAPI:
    async def test_record_returns_201_with_balance(
        self, api_client: AsyncClient, mock_payment_store, mock_invoice_store,
        paid_invoice, recorded_payment,
    ):
        mock_payment_store.create_payment.return_value = recorded_payment
        mock_invoice_store.get_invoice.return_value = paid_invoice

        response = await api_client.post(
            "/api/payments",
            json={"invoice_id": 1, "amount": 400, "payment_mode": "cheque"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 5
        assert data["invoice_amount_paid"] == 400.0
        assert data["invoice_balance"] == 600.0

    @pytest.mark.parametrize("amount", [0, -5])
    async def test_non_positive_amount_rejected(self, api_client: AsyncClient, amount):
        response = await api_client.post("/api/payments", json={"invoice_id": 1, "amount": amount})
        assert response.status_code == 422

    @pytest.mark.parametrize("amount", [b"Infinity", b"NaN", b"1e13"])
    async def test_non_finite_or_oversized_amount_rejected(
        self, api_client: AsyncClient, mock_payment_store, amount
    ):
        response = await api_client.post(
            "/api/payments",
            content=b'{"invoice_id": 1, "amount": ' + amount + b"}",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        mock_payment_store.create_payment.assert_not_awaited()

    async def test_unknown_invoice_is_404(self, api_client: AsyncClient, mock_payment_store):
        mock_payment_store.create_payment.side_effect = InvoiceNotFoundError(999)
        response = await api_client.post("/api/payments", json={"invoice_id": 999, "amount": 10})
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVOICE_NOT_FOUND"

    async def test_list_by_invoice(self, api_client: AsyncClient, mock_payment_store, recorded_payment):
        mock_payment_store.list_payments.return_value = [recorded_payment]
        response = await api_client.get("/api/payments", params={"invoice_id": 1})
        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert mock_payment_store.list_payments.await_args.kwargs["invoice_ids"] == [1]

    async def test_update(
        self, api_client: AsyncClient, mock_payment_store, mock_invoice_store,
        paid_invoice, recorded_payment,
    ):
        mock_payment_store.get_payment.return_value = recorded_payment
        mock_payment_store.update_payment.side_effect = lambda p: p
        mock_invoice_store.get_invoice.return_value = paid_invoice
        response = await api_client.put("/api/payments/5", json={"amount": 450})
        assert response.status_code == 200
        assert response.json()["amount"] == 450.0

    async def test_delete_returns_payment(
        self, api_client: AsyncClient, mock_payment_store, mock_invoice_store,
        paid_invoice, recorded_payment,
    ):
        mock_payment_store.delete_payment.return_value = recorded_payment
        mock_invoice_store.get_invoice.return_value = paid_invoice.model_copy(update={"amount_paid": 0.0})
        response = await api_client.delete("/api/payments/5")
        assert response.status_code == 200
        assert response.json()["invoice_balance"] == 1000.0

    async def test_delete_missing(self, api_client: AsyncClient, mock_payment_store):
        mock_payment_store.delete_payment.side_effect = PaymentNotFoundError(99)
        response = await api_client.delete("/api/payments/99")
        assert response.status_code == 404
        assert response.json()["error_code"] == "PAYMENT_NOT_FOUND"
