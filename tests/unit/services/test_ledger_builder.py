"""Tests for the client statement of account."""

from datetime import date

from src.core.entities import Invoice, LedgerEntryKind, Payment, PaymentMode, Region
from src.core.services.ledger_builder import build_ledger

DAY1 = date(2024, 5, 1)
DAY2 = date(2024, 5, 2)


def _invoice(invoice_id: int, number: str, total: float, day: date, client_id: int = 7) -> Invoice:
    return Invoice(
        id=invoice_id,
        invoice_number=number,
        client_id=client_id,
        region=Region.UAE,
        invoice_date=day,
        net_amount=total,
        total_amount=total,
    )


def _payment(payment_id: int, invoice_id: int, amount: float, day: date) -> Payment:
    return Payment(
        id=payment_id,
        invoice_id=invoice_id,
        amount=amount,
        payment_date=day,
        payment_mode=PaymentMode.BANK_TRANSFER,
    )


class TestBuildLedger:
    def test_running_balance(self):
        invoices = [
            _invoice(1, "UAE-INV-0001", 1000.0, DAY1),
            _invoice(2, "UAE-INV-0002", 500.0, DAY2),
        ]
        payments = [_payment(1, 1, 400.0, DAY2)]

        ledger = build_ledger(7, None, None, invoices, payments)

        assert [e.kind for e in ledger.entries] == [
            LedgerEntryKind.INVOICE,
            LedgerEntryKind.INVOICE,
            LedgerEntryKind.PAYMENT,
        ]
        assert [e.balance for e in ledger.entries] == [1000.0, 1500.0, 1100.0]
        assert ledger.total_debit == 1500.0
        assert ledger.total_credit == 400.0
        assert ledger.closing_balance == 1100.0

    def test_payment_references_invoice_number(self):
        invoices = [_invoice(1, "UAE-INV-0001", 1000.0, DAY1)]
        ledger = build_ledger(7, None, None, invoices, [_payment(1, 1, 250.0, DAY1)])
        payment_entry = ledger.entries[1]
        assert payment_entry.reference_label == "UAE-INV-0001"
        assert payment_entry.particulars == "Payment - bank transfer"
        assert payment_entry.credit == 250.0

    def test_window_is_inclusive(self):
        invoices = [
            _invoice(1, "UAE-INV-0001", 100.0, date(2024, 4, 30)),
            _invoice(2, "UAE-INV-0002", 200.0, DAY1),
            _invoice(3, "UAE-INV-0003", 300.0, DAY2),
            _invoice(4, "UAE-INV-0004", 400.0, date(2024, 5, 3)),
        ]
        ledger = build_ledger(7, DAY1, DAY2, invoices, [])
        assert [e.reference_label for e in ledger.entries] == ["UAE-INV-0002", "UAE-INV-0003"]
        assert ledger.closing_balance == 500.0

    def test_payment_in_window_for_invoice_before_window(self):
        invoices = [_invoice(1, "UAE-INV-0001", 1000.0, date(2024, 1, 15))]
        payments = [_payment(1, 1, 300.0, DAY1)]
        ledger = build_ledger(7, DAY1, None, invoices, payments)
        assert len(ledger.entries) == 1
        assert ledger.closing_balance == -300.0

    def test_other_clients_are_ignored(self):
        invoices = [
            _invoice(1, "UAE-INV-0001", 1000.0, DAY1),
            _invoice(2, "UAE-INV-0002", 999.0, DAY1, client_id=8),
        ]
        payments = [_payment(1, 2, 999.0, DAY1)]
        ledger = build_ledger(7, None, None, invoices, payments)
        assert len(ledger.entries) == 1
        assert ledger.closing_balance == 1000.0

    def test_empty(self):
        ledger = build_ledger(7, None, None, [], [])
        assert ledger.entries == []
        assert ledger.closing_balance == 0.0

    def test_same_input_same_output(self):
        invoices = [
            _invoice(1, "UAE-INV-0001", 1000.0, DAY1),
            _invoice(2, "UAE-INV-0002", 500.0, DAY1),
        ]
        payments = [_payment(1, 1, 100.0, DAY1), _payment(2, 2, 50.0, DAY1)]
        first = build_ledger(7, None, None, invoices, payments)
        second = build_ledger(7, None, None, invoices, payments)
        assert first == second
        assert [e.reference_label for e in first.entries] == [
            "UAE-INV-0001",
            "UAE-INV-0002",
            "UAE-INV-0001",
            "UAE-INV-0002",
        ]
