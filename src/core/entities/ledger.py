"""Client ledger (statement of account) entities. Derived, never persisted."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field


class LedgerEntryKind(str, Enum):
    """Source of a ledger line."""

    INVOICE = "invoice"
    PAYMENT = "payment"


class LedgerEntry(BaseModel):
    """A single debit or credit line with the running balance after it."""

    date: dt.date
    kind: LedgerEntryKind
    reference_label: str
    particulars: str
    debit: float = 0.0
    credit: float = 0.0
    balance: float = 0.0


class Ledger(BaseModel):
    """Chronological statement for one client over a date window."""

    client_id: int
    from_date: dt.date | None = None
    to_date: dt.date | None = None
    entries: list[LedgerEntry] = Field(default_factory=list)
    total_debit: float = 0.0
    total_credit: float = 0.0
    closing_balance: float = 0.0
