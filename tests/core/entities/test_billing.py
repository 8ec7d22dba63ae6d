"""Tests for quotation and invoice entities."""

from datetime import date

from src.core.entities import DocumentStatus, Invoice, Quotation, Region, TopLevelItem


class TestInvoiceTotals:
    def test_totals_from_items(self, sample_items):
        invoice = Invoice(client_id=1, region=Region.UAE, items=sample_items)
        assert invoice.net_amount == 330.0
        assert invoice.vat_amount == 16.5
        assert invoice.total_amount == 346.5

    def test_stale_totals_are_replaced(self, sample_items):
        invoice = Invoice(
            client_id=1,
            region=Region.UAE,
            items=sample_items,
            net_amount=1.0,
            vat_amount=1.0,
            total_amount=2.0,
        )
        assert invoice.total_amount == 346.5

    def test_header_only_keeps_stored_totals(self):
        invoice = Invoice(
            client_id=1,
            region=Region.SAUDI,
            net_amount=1000.0,
            vat_amount=50.0,
            total_amount=1050.0,
        )
        assert invoice.total_amount == 1050.0

    def test_items_are_renumbered(self, sample_items):
        invoice = Invoice(client_id=1, region=Region.UAE, items=list(reversed(sample_items)))
        assert [i.serial_no for i in invoice.items] == [1, 2]
        assert [s.label for s in invoice.items[1].sub_items] == ["2.1", "2.2"]

    def test_defaults(self):
        invoice = Invoice(client_id=1, region=Region.UAE)
        assert invoice.status == DocumentStatus.DRAFT
        assert invoice.invoice_date == date.today()
        assert invoice.amount_paid == 0.0
        assert invoice.invoice_number is None


class TestInvoiceBalance:
    def test_balance_is_total_minus_paid(self, sample_items):
        invoice = Invoice(client_id=1, region=Region.UAE, items=sample_items, amount_paid=100)
        assert invoice.balance == 246.5

    def test_balance_negative_when_overpaid(self):
        invoice = Invoice(client_id=1, region=Region.UAE, total_amount=100.0, amount_paid=150.0)
        assert invoice.balance == -50.0

    def test_balance_is_serialized(self, sample_invoice):
        data = sample_invoice.model_dump()
        assert data["balance"] == 346.5


class TestQuotation:
    def test_quotation_totals(self):
        quotation = Quotation(
            client_id=2,
            region=Region.SAUDI,
            items=[TopLevelItem(description="Booth", quantity=1, rate=1000)],
        )
        assert quotation.net_amount == 1000.0
        assert quotation.vat_amount == 50.0
        assert quotation.total_amount == 1050.0
        assert quotation.quotation_number is None
