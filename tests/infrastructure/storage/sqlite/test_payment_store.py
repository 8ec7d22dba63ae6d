"""Tests for SQLite payment storage and the amount-paid bookkeeping."""

import asyncio
from datetime import date

import pytest

from src.core.entities import Invoice, Payment, PaymentMode, Region, TopLevelItem
from src.core.exceptions import InvoiceNotFoundError, PaymentNotFoundError
from src.infrastructure.storage.sqlite.connection import get_transaction
from src.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from src.infrastructure.storage.sqlite.payment_store import SQLitePaymentStore


@pytest.fixture
async def invoice(uae_client) -> Invoice:
    """Invoice with a total of exactly 1000.00 (952.38 net)."""
    return await SQLiteInvoiceStore(padding=4).create_invoice(
        Invoice(
            client_id=uae_client.id,
            region=Region.UAE,
            invoice_date=date(2024, 5, 1),
            items=[TopLevelItem(description="Exhibition stand", quantity=1, rate=952.38)],
        )
    )


async def _amount_paid(invoice_id: int) -> float:
    fetched = await SQLiteInvoiceStore().get_invoice(invoice_id)
    return fetched.amount_paid


class TestSQLitePaymentStore:
    async def test_payments_accumulate(self, invoice):
        store = SQLitePaymentStore()
        assert invoice.total_amount == 1000.0

        first = await store.create_payment(Payment(invoice_id=invoice.id, amount=400.0))
        await store.create_payment(
            Payment(invoice_id=invoice.id, amount=600.0, payment_mode=PaymentMode.CASH)
        )

        assert first.id is not None
        assert first.region == Region.UAE
        fetched = await SQLiteInvoiceStore().get_invoice(invoice.id)
        assert fetched.amount_paid == 1000.0
        assert fetched.balance == 0.0

    async def test_concurrent_payments_lose_no_increment(self, invoice):
        store = SQLitePaymentStore()
        payments = await asyncio.gather(
            *(store.create_payment(Payment(invoice_id=invoice.id, amount=10.0)) for _ in range(20))
        )

        assert len({p.id for p in payments}) == 20
        fetched = await SQLiteInvoiceStore().get_invoice(invoice.id)
        assert fetched.amount_paid == 200.0
        assert fetched.balance == 800.0

    async def test_delete_restores_balance(self, invoice):
        store = SQLitePaymentStore()
        await store.create_payment(Payment(invoice_id=invoice.id, amount=400.0))
        second = await store.create_payment(Payment(invoice_id=invoice.id, amount=600.0))

        removed = await store.delete_payment(second.id)

        assert removed.amount == 600.0
        assert await _amount_paid(invoice.id) == 400.0
        assert await store.get_payment(second.id) is None

    async def test_delete_missing(self, billing_db):
        with pytest.raises(PaymentNotFoundError):
            await SQLitePaymentStore().delete_payment(9999)

    async def test_unknown_invoice_writes_nothing(self, billing_db):
        store = SQLitePaymentStore()
        with pytest.raises(InvoiceNotFoundError):
            await store.create_payment(Payment(invoice_id=9999, amount=10.0))
        assert await store.list_payments() == []

    async def test_update_applies_difference(self, invoice):
        store = SQLitePaymentStore()
        payment = await store.create_payment(Payment(invoice_id=invoice.id, amount=400.0))

        payment.amount = 250.0
        await store.update_payment(payment)

        assert await _amount_paid(invoice.id) == 250.0
        assert (await store.get_payment(payment.id)).amount == 250.0

    async def test_update_moves_between_invoices(self, invoice, uae_client):
        other = await SQLiteInvoiceStore(padding=4).create_invoice(
            Invoice(client_id=uae_client.id, region=Region.UAE)
        )
        store = SQLitePaymentStore()
        payment = await store.create_payment(Payment(invoice_id=invoice.id, amount=300.0))

        payment.invoice_id = other.id
        await store.update_payment(payment)

        assert await _amount_paid(invoice.id) == 0.0
        assert await _amount_paid(other.id) == 300.0

    async def test_update_missing(self, invoice):
        with pytest.raises(PaymentNotFoundError):
            await SQLitePaymentStore().update_payment(
                Payment(id=9999, invoice_id=invoice.id, amount=1.0)
            )

    async def test_overpayment_goes_negative(self, invoice):
        await SQLitePaymentStore().create_payment(Payment(invoice_id=invoice.id, amount=1200.0))
        fetched = await SQLiteInvoiceStore().get_invoice(invoice.id)
        assert fetched.balance == -200.0

    async def test_list_filters(self, invoice):
        store = SQLitePaymentStore()
        await store.create_payment(
            Payment(invoice_id=invoice.id, amount=100.0, payment_date=date(2024, 5, 2))
        )
        await store.create_payment(
            Payment(invoice_id=invoice.id, amount=200.0, payment_date=date(2024, 6, 2))
        )

        newest_first = await store.list_payments(invoice_ids=[invoice.id])
        assert [p.amount for p in newest_first] == [200.0, 100.0]

        may = await store.list_payments(from_date=date(2024, 5, 1), to_date=date(2024, 5, 31))
        assert [p.amount for p in may] == [100.0]

        assert await store.list_payments(region="SAUDI") == []
        assert await store.list_payments(invoice_ids=[]) == []

    async def test_reconcile_amount_paid(self, invoice):
        store = SQLitePaymentStore()
        await store.create_payment(Payment(invoice_id=invoice.id, amount=100.0))
        await store.create_payment(Payment(invoice_id=invoice.id, amount=50.5))
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE invoices SET amount_paid = 0 WHERE id = ?", (invoice.id,)
            )

        assert await store.reconcile_amount_paid(invoice.id) == 150.5
        assert await _amount_paid(invoice.id) == 150.5

    async def test_reconcile_missing_invoice(self, billing_db):
        with pytest.raises(InvoiceNotFoundError):
            await SQLitePaymentStore().reconcile_amount_paid(9999)

    async def test_deleting_invoice_removes_payments(self, invoice):
        store = SQLitePaymentStore()
        await store.create_payment(Payment(invoice_id=invoice.id, amount=100.0))
        await SQLiteInvoiceStore().delete_invoice(invoice.id)
        assert await store.list_payments() == []
