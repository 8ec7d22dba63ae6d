"""CSV renderings of ledgers and invoice lists."""

import csv
import io
from collections.abc import Mapping, Sequence
from datetime import date

from src.core.entities.billing import Invoice
from src.core.entities.ledger import Ledger, LedgerEntryKind
from src.core.money import round2


def _fmt_date(day: date | None, fallback: str = "") -> str:
    return day.strftime("%d %b %Y") if day else fallback


def _fmt_amount(value: float) -> str:
    return f"{value:.2f}"


def render_ledger_csv(ledger: Ledger, client_name: str, currency: str) -> str:
    """Statement of account with a closing balance footer."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(
        ["Date", "Particulars", "INV Type", "INV No.", f"Debit ({currency})", f"Credit ({currency})"]
    )
    for entry in ledger.entries:
        writer.writerow([
            _fmt_date(entry.date),
            entry.particulars,
            "TAX INV" if entry.kind == LedgerEntryKind.INVOICE else "PAYMENT",
            entry.reference_label,
            _fmt_amount(entry.debit) if entry.debit > 0 else "-",
            _fmt_amount(entry.credit) if entry.credit > 0 else "-",
        ])

    writer.writerow([""] * 6)
    writer.writerow(["", "", "", "Closing Balance", "", _fmt_amount(ledger.closing_balance)])
    writer.writerow([""] * 6)
    writer.writerow(["Client:", client_name, "", "", "", ""])
    period = f"{_fmt_date(ledger.from_date, 'Beginning')} to {_fmt_date(ledger.to_date, 'Today')}"
    writer.writerow(["Period:", period, "", "", "", ""])
    return output.getvalue()


def render_invoices_csv(
    invoices: Sequence[Invoice], client_names: Mapping[int, str]
) -> str:
    """Invoice register with a totals row."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow([
        "Invoice #", "Client", "Date", "Net Amount", "VAT", "Total",
        "Amount Paid", "Balance", "Status", "Region",
    ])
    for inv in invoices:
        writer.writerow([
            inv.invoice_number or "",
            client_names.get(inv.client_id, ""),
            _fmt_date(inv.invoice_date),
            _fmt_amount(inv.net_amount),
            _fmt_amount(inv.vat_amount),
            _fmt_amount(inv.total_amount),
            _fmt_amount(inv.amount_paid),
            _fmt_amount(inv.balance),
            inv.status.value,
            inv.region.value,
        ])

    writer.writerow([""] * 10)
    writer.writerow([
        "TOTALS", "", "",
        _fmt_amount(round2(sum(i.net_amount for i in invoices))),
        _fmt_amount(round2(sum(i.vat_amount for i in invoices))),
        _fmt_amount(round2(sum(i.total_amount for i in invoices))),
        _fmt_amount(round2(sum(i.amount_paid for i in invoices))),
        _fmt_amount(round2(sum(i.balance for i in invoices))),
        "", "",
    ])
    return output.getvalue()
