"""
Line item arithmetic and numbering.

Totals are always recomputed from the full item list:

    net   = round2(sum of every item and sub-item amount)
    vat   = round2(net * VAT_RATE)
    total = round2(net + vat)

Serial numbers count top-level items only; sub-items are labelled
"<parent serial>.<position>".
"""

from collections.abc import Sequence

from src.core.entities.line_item import DocumentTotals, LineItem, SubItem, TopLevelItem
from src.core.exceptions import InvalidLineItemError
from src.core.money import VAT_RATE, compute_amount, round2

__all__ = [
    "VAT_RATE",
    "add_item",
    "add_sub_item",
    "aggregate",
    "compute_amount",
    "flatten",
    "nest",
    "remove_item",
    "remove_sub_item",
    "renumber",
    "round2",
]


def _amounts(items: Sequence[TopLevelItem | LineItem]) -> list[float]:
    amounts: list[float] = []
    for item in items:
        amounts.append(item.amount)
        if isinstance(item, TopLevelItem):
            amounts.extend(sub.amount for sub in item.sub_items)
    return amounts


def aggregate(items: Sequence[TopLevelItem | LineItem]) -> DocumentTotals:
    """Compute net, VAT and total for a document's items.

    Accepts either the nested form or flat rows; flat rows already contain
    their sub-items, nested items contribute their sub-items explicitly.
    """
    net = round2(sum(_amounts(items)))
    vat = round2(net * VAT_RATE)
    return DocumentTotals(
        net_amount=net,
        vat_amount=vat,
        total_amount=round2(net + vat),
    )


def renumber(items: Sequence[TopLevelItem]) -> list[TopLevelItem]:
    """Return copies with serials 1..n and sub-item labels in list order."""
    numbered: list[TopLevelItem] = []
    for serial, item in enumerate(items, start=1):
        subs = [
            sub.model_copy(update={"label": f"{serial}.{position}"})
            for position, sub in enumerate(item.sub_items, start=1)
        ]
        numbered.append(item.model_copy(update={"serial_no": serial, "sub_items": subs}))
    return numbered


def _index_of(items: Sequence[TopLevelItem], serial_no: int) -> int:
    for index, item in enumerate(items):
        if item.serial_no == serial_no:
            return index
    raise InvalidLineItemError(f"no top-level item with serial {serial_no}", serial_no)


def add_item(items: Sequence[TopLevelItem], item: TopLevelItem) -> list[TopLevelItem]:
    """Append a top-level item."""
    return renumber([*items, item])


def remove_item(items: Sequence[TopLevelItem], serial_no: int) -> list[TopLevelItem]:
    """Remove a top-level item together with its sub-items."""
    index = _index_of(items, serial_no)
    return renumber([*items[:index], *items[index + 1 :]])


def add_sub_item(
    items: Sequence[TopLevelItem], parent_serial_no: int, sub: SubItem
) -> list[TopLevelItem]:
    """Append a sub-item under the top-level item with ``parent_serial_no``."""
    index = _index_of(items, parent_serial_no)
    parent = items[index]
    updated = parent.model_copy(update={"sub_items": [*parent.sub_items, sub]})
    return renumber([*items[:index], updated, *items[index + 1 :]])


def remove_sub_item(
    items: Sequence[TopLevelItem], parent_serial_no: int, position: int
) -> list[TopLevelItem]:
    """Remove the sub-item at 1-based ``position`` under a parent."""
    index = _index_of(items, parent_serial_no)
    parent = items[index]
    if not 1 <= position <= len(parent.sub_items):
        raise InvalidLineItemError(
            f"item {parent_serial_no} has no sub-item {position}", parent_serial_no
        )
    subs = [s for i, s in enumerate(parent.sub_items, start=1) if i != position]
    updated = parent.model_copy(update={"sub_items": subs})
    return renumber([*items[:index], updated, *items[index + 1 :]])


def flatten(items: Sequence[TopLevelItem]) -> list[LineItem]:
    """Persistence form: each parent row followed by its sub-item rows."""
    rows: list[LineItem] = []
    for item in renumber(items):
        rows.append(
            LineItem(
                serial_no=item.serial_no,
                description=item.description,
                size=item.size,
                quantity=item.quantity,
                rate=item.rate,
            )
        )
        for position, sub in enumerate(item.sub_items, start=1):
            rows.append(
                LineItem(
                    serial_no=position,
                    description=sub.description,
                    size=sub.size,
                    quantity=sub.quantity,
                    rate=sub.rate,
                    is_sub_item=True,
                    parent_serial_no=item.serial_no,
                )
            )
    return rows


def nest(rows: Sequence[LineItem]) -> list[TopLevelItem]:
    """Rebuild the two-level structure from stored rows.

    Top-level rows are ordered by serial, sub-items by their own serial.
    A sub-item whose parent serial has no top-level row is rejected.
    """
    parents = sorted((r for r in rows if not r.is_sub_item), key=lambda r: r.serial_no)
    children: dict[int, list[LineItem]] = {}
    for row in rows:
        if row.is_sub_item:
            children.setdefault(row.parent_serial_no, []).append(row)  # type: ignore[arg-type]

    known = {p.serial_no for p in parents}
    orphans = sorted(set(children) - known)
    if orphans:
        raise InvalidLineItemError(
            f"sub-items reference missing parent {orphans[0]}", orphans[0]
        )

    items = [
        TopLevelItem(
            serial_no=parent.serial_no,
            description=parent.description,
            size=parent.size,
            quantity=parent.quantity,
            rate=parent.rate,
            sub_items=[
                SubItem(
                    description=child.description,
                    size=child.size,
                    quantity=child.quantity,
                    rate=child.rate,
                )
                for child in sorted(children.get(parent.serial_no, []), key=lambda r: r.serial_no)
            ],
        )
        for parent in parents
    ]
    return renumber(items)
