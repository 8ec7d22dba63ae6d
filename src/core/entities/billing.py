"""Quotation and invoice domain entities."""

from datetime import date, datetime

from pydantic import BaseModel, Field, computed_field, model_validator

from src.core.entities.common import DocumentStatus, Region
from src.core.entities.line_item import TopLevelItem
from src.core.services.balance import outstanding_balance
from src.core.services.line_items import aggregate, renumber


class BillingDocument(BaseModel):
    """Fields shared by quotations and invoices.

    When items are present the totals are recomputed from them on every
    construction, so stale totals can never be carried along with edited
    items. Header-only rows (items not loaded) keep their stored totals.
    """

    id: int | None = None
    client_id: int
    region: Region
    event_id: int | None = None
    status: DocumentStatus = DocumentStatus.DRAFT
    notes: str | None = None
    items: list[TopLevelItem] = Field(default_factory=list)
    net_amount: float = 0.0
    vat_amount: float = 0.0
    total_amount: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def compute_totals(self) -> "BillingDocument":
        if self.items:
            self.items = renumber(self.items)
            totals = aggregate(self.items)
            self.net_amount = totals.net_amount
            self.vat_amount = totals.vat_amount
            self.total_amount = totals.total_amount
        return self


class Quotation(BillingDocument):
    """A priced proposal. Its number is not fiscally sequence-controlled."""

    quotation_number: str | None = None
    quotation_date: date = Field(default_factory=date.today)


class Invoice(BillingDocument):
    """A tax invoice. The number is issued once, at creation, by the sequencer."""

    invoice_number: str | None = None
    invoice_date: date = Field(default_factory=date.today)
    amount_paid: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def balance(self) -> float:
        """Outstanding amount; derived, never writable."""
        return outstanding_balance(self.total_amount, self.amount_paid)
