"""
Client statement of account.

Invoices become debits of their total, payments become credits of their
amount. Entries are sorted by date with a stable sort, so same-day entries
keep their input order (invoices first, then payments, each in the order
supplied) and repeated runs over the same snapshot are identical.
"""

from collections.abc import Sequence
from datetime import date

from src.core.entities.billing import Invoice
from src.core.entities.ledger import Ledger, LedgerEntry, LedgerEntryKind
from src.core.entities.payment import Payment
from src.core.money import round2


def _in_window(day: date, from_date: date | None, to_date: date | None) -> bool:
    if from_date is not None and day < from_date:
        return False
    if to_date is not None and day > to_date:
        return False
    return True


def _payment_particulars(payment: Payment) -> str:
    mode = getattr(payment.payment_mode, "value", payment.payment_mode)
    return f"Payment - {str(mode).replace('_', ' ')}"


def build_ledger(
    client_id: int,
    from_date: date | None,
    to_date: date | None,
    invoices: Sequence[Invoice],
    payments: Sequence[Payment],
) -> Ledger:
    """Build the chronological ledger and closing balance for one client.

    ``from_date``/``to_date`` are inclusive; ``None`` leaves that side open.
    Payments are attributed to the client through their owning invoice, which
    is looked up among all supplied invoices regardless of the window.
    """
    owned = {inv.id: inv for inv in invoices if inv.client_id == client_id}

    entries: list[LedgerEntry] = []
    for inv in invoices:
        if inv.client_id != client_id or not _in_window(inv.invoice_date, from_date, to_date):
            continue
        entries.append(
            LedgerEntry(
                date=inv.invoice_date,
                kind=LedgerEntryKind.INVOICE,
                reference_label=inv.invoice_number or "-",
                particulars="Invoice",
                debit=inv.total_amount,
            )
        )

    for pmt in payments:
        owner = owned.get(pmt.invoice_id)
        if owner is None or not _in_window(pmt.payment_date, from_date, to_date):
            continue
        entries.append(
            LedgerEntry(
                date=pmt.payment_date,
                kind=LedgerEntryKind.PAYMENT,
                reference_label=owner.invoice_number or pmt.reference_number or "-",
                particulars=_payment_particulars(pmt),
                credit=pmt.amount,
            )
        )

    entries.sort(key=lambda e: e.date)

    running = 0.0
    total_debit = 0.0
    total_credit = 0.0
    for entry in entries:
        running = round2(running + entry.debit - entry.credit)
        entry.balance = running
        total_debit += entry.debit
        total_credit += entry.credit

    return Ledger(
        client_id=client_id,
        from_date=from_date,
        to_date=to_date,
        entries=entries,
        total_debit=round2(total_debit),
        total_credit=round2(total_credit),
        closing_balance=running,
    )
