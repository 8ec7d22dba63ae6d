"""Entity to response DTO conversion shared by use cases and routes."""

from collections.abc import Sequence

from src.application.dto.requests import LineItemRequest
from src.application.dto.responses import (
    ClientResponse,
    InvoiceResponse,
    LedgerEntryResponse,
    LedgerResponse,
    LineItemResponse,
    PaymentResponse,
    QuotationResponse,
    SubItemResponse,
)
from src.core.entities import (
    Client,
    Invoice,
    Ledger,
    Payment,
    Quotation,
    SubItem,
    TopLevelItem,
)
from src.core.services.amount_in_words import to_words
from src.core.services.currency import currency_code, format_currency


def items_from_request(items: Sequence[LineItemRequest]) -> list[TopLevelItem]:
    """Build domain items from request items. Amounts are derived, not copied."""
    return [
        TopLevelItem(
            description=item.description,
            size=item.size,
            quantity=item.quantity,
            rate=item.rate,
            sub_items=[
                SubItem(
                    description=sub.description,
                    size=sub.size,
                    quantity=sub.quantity,
                    rate=sub.rate,
                )
                for sub in item.sub_items
            ],
        )
        for item in items
    ]


def line_items_response(items: Sequence[TopLevelItem]) -> list[LineItemResponse]:
    return [
        LineItemResponse(
            serial_no=item.serial_no,
            description=item.description,
            size=item.size,
            quantity=item.quantity,
            rate=item.rate,
            amount=item.amount,
            sub_items=[
                SubItemResponse(
                    label=sub.label,
                    description=sub.description,
                    size=sub.size,
                    quantity=sub.quantity,
                    rate=sub.rate,
                    amount=sub.amount,
                )
                for sub in item.sub_items
            ],
        )
        for item in items
    ]


def client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,  # type: ignore[arg-type]
        name=client.name,
        region=client.region.value,
        currency=currency_code(client.region),
        email=client.email,
        phone=client.phone,
        address=client.address,
        trn=client.trn,
        created_at=client.created_at,
    )


def invoice_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number or "",
        client_id=invoice.client_id,
        region=invoice.region.value,
        currency=currency_code(invoice.region),
        event_id=invoice.event_id,
        invoice_date=invoice.invoice_date,
        status=invoice.status.value,
        notes=invoice.notes,
        items=line_items_response(invoice.items),
        net_amount=invoice.net_amount,
        vat_amount=invoice.vat_amount,
        total_amount=invoice.total_amount,
        amount_paid=invoice.amount_paid,
        balance=invoice.balance,
        amount_in_words=to_words(invoice.total_amount, invoice.region),
        formatted_total=format_currency(invoice.total_amount, invoice.region),
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def quotation_response(quotation: Quotation) -> QuotationResponse:
    return QuotationResponse(
        id=quotation.id,  # type: ignore[arg-type]
        quotation_number=quotation.quotation_number or "",
        client_id=quotation.client_id,
        region=quotation.region.value,
        currency=currency_code(quotation.region),
        event_id=quotation.event_id,
        quotation_date=quotation.quotation_date,
        status=quotation.status.value,
        notes=quotation.notes,
        items=line_items_response(quotation.items),
        net_amount=quotation.net_amount,
        vat_amount=quotation.vat_amount,
        total_amount=quotation.total_amount,
        amount_in_words=to_words(quotation.total_amount, quotation.region),
        formatted_total=format_currency(quotation.total_amount, quotation.region),
        created_at=quotation.created_at,
        updated_at=quotation.updated_at,
    )


def payment_response(payment: Payment, invoice: Invoice | None = None) -> PaymentResponse:
    return PaymentResponse(
        id=payment.id,  # type: ignore[arg-type]
        invoice_id=payment.invoice_id,
        region=payment.region.value if payment.region else None,
        amount=payment.amount,
        payment_date=payment.payment_date,
        payment_mode=payment.payment_mode.value,
        reference_number=payment.reference_number,
        notes=payment.notes,
        created_at=payment.created_at,
        invoice_amount_paid=invoice.amount_paid if invoice else None,
        invoice_balance=invoice.balance if invoice else None,
    )


def ledger_response(ledger: Ledger, client: Client) -> LedgerResponse:
    return LedgerResponse(
        client_id=ledger.client_id,
        client_name=client.name,
        currency=currency_code(client.region),
        from_date=ledger.from_date,
        to_date=ledger.to_date,
        entries=[
            LedgerEntryResponse(
                date=entry.date,
                kind=entry.kind.value,
                reference_label=entry.reference_label,
                particulars=entry.particulars,
                debit=entry.debit,
                credit=entry.credit,
                balance=entry.balance,
            )
            for entry in ledger.entries
        ],
        total_debit=ledger.total_debit,
        total_credit=ledger.total_credit,
        closing_balance=ledger.closing_balance,
        formatted_closing_balance=format_currency(ledger.closing_balance, client.region),
    )
