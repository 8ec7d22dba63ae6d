"""Core domain entities."""

from src.core.entities.common import DocumentStatus, PaymentMode, Region
from src.core.entities.line_item import (
    DocumentTotals,
    LineItem,
    PricedLine,
    SubItem,
    TopLevelItem,
)
from src.core.entities.billing import BillingDocument, Invoice, Quotation
from src.core.entities.client import Client
from src.core.entities.ledger import Ledger, LedgerEntry, LedgerEntryKind
from src.core.entities.payment import Payment
from src.core.entities.sequence import DocumentSequence

__all__ = [
    # Enumerations
    "Region",
    "DocumentStatus",
    "PaymentMode",
    # Line items
    "PricedLine",
    "LineItem",
    "SubItem",
    "TopLevelItem",
    "DocumentTotals",
    # Documents
    "BillingDocument",
    "Quotation",
    "Invoice",
    # Parties and money movements
    "Client",
    "Payment",
    # Numbering
    "DocumentSequence",
    # Ledger
    "Ledger",
    "LedgerEntry",
    "LedgerEntryKind",
]
