"""
Line item entities.

Documents hold an explicit two-level structure: top-level items, each owning
an optional list of sub-items. Sub-items cannot own sub-items of their own.
The flat ``LineItem`` row is the persistence form of the same data.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.core.money import compute_amount


class PricedLine(BaseModel):
    """Common pricing fields. ``amount`` is always derived, never trusted."""

    description: str = ""
    size: str | None = None
    quantity: float = 1.0
    rate: float = 0.0
    amount: float = 0.0

    @model_validator(mode="after")
    def recompute_amount(self) -> "PricedLine":
        """Set amount = round2(quantity * rate)."""
        self.amount = compute_amount(self.quantity, self.rate)
        return self


class SubItem(PricedLine):
    """A priced breakdown line under a top-level item."""

    model_config = ConfigDict(extra="forbid")

    label: str = ""  # e.g. "3.1", assigned by renumbering


class TopLevelItem(PricedLine):
    """A numbered line item that may own sub-items."""

    serial_no: int = 0
    sub_items: list[SubItem] = Field(default_factory=list)

    @property
    def group_amount(self) -> float:
        """Amount of the item plus all of its sub-items (unrounded sum)."""
        return self.amount + sum(s.amount for s in self.sub_items)


class LineItem(PricedLine):
    """Flat line item row as stored in ``invoice_items`` / ``quotation_items``."""

    id: int | None = None
    document_id: int | None = None
    serial_no: int
    is_sub_item: bool = False
    parent_serial_no: int | None = None  # set only for sub-items

    @model_validator(mode="after")
    def check_parent_reference(self) -> "LineItem":
        if self.is_sub_item and self.parent_serial_no is None:
            raise ValueError("sub-item rows must reference a parent serial number")
        if not self.is_sub_item and self.parent_serial_no is not None:
            raise ValueError("top-level rows cannot reference a parent")
        return self


class DocumentTotals(BaseModel):
    """Derived net/VAT/total for a document. Never hand-edited."""

    net_amount: float = 0.0
    vat_amount: float = 0.0
    total_amount: float = 0.0
