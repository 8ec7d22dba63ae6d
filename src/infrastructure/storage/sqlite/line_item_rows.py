"""Shared persistence of document line items (invoice_items / quotation_items)."""

from collections.abc import Sequence
from datetime import date, datetime

import aiosqlite

from src.core.entities.line_item import LineItem, TopLevelItem
from src.core.services.line_items import flatten, nest

# table -> foreign key column
ITEM_TABLES = {
    "invoice_items": "invoice_id",
    "quotation_items": "quotation_id",
}


async def insert_items(
    conn: aiosqlite.Connection,
    table: str,
    document_id: int,
    items: Sequence[TopLevelItem],
) -> int:
    """Write the flat rows for ``items``. Returns the number of rows written."""
    fk_column = ITEM_TABLES[table]
    rows = flatten(items)
    for row in rows:
        await conn.execute(
            f"""
            INSERT INTO {table} (
                {fk_column}, serial_no, description, size,
                quantity, rate, amount, is_sub_item, parent_serial_no
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                document_id,
                row.serial_no,
                row.description,
                row.size,
                row.quantity,
                row.rate,
                row.amount,
                1 if row.is_sub_item else 0,
                row.parent_serial_no,
            ),
        )
    return len(rows)


async def replace_items(
    conn: aiosqlite.Connection,
    table: str,
    document_id: int,
    items: Sequence[TopLevelItem],
) -> int:
    """Delete every stored row of the document and write ``items`` instead."""
    fk_column = ITEM_TABLES[table]
    await conn.execute(f"DELETE FROM {table} WHERE {fk_column} = ?", (document_id,))
    return await insert_items(conn, table, document_id, items)


async def load_items(
    conn: aiosqlite.Connection, table: str, document_id: int
) -> list[TopLevelItem]:
    """Read the document's rows and rebuild the two-level structure."""
    fk_column = ITEM_TABLES[table]
    cursor = await conn.execute(
        f"SELECT * FROM {table} WHERE {fk_column} = ? ORDER BY is_sub_item, serial_no, id",
        (document_id,),
    )
    rows = await cursor.fetchall()
    return nest([row_to_line_item(r, fk_column) for r in rows])


def row_to_line_item(row: aiosqlite.Row, fk_column: str) -> LineItem:
    """Convert a database row to a flat LineItem."""
    return LineItem(
        id=row["id"],
        document_id=row[fk_column],
        serial_no=row["serial_no"],
        description=row["description"] or "",
        size=row["size"],
        quantity=float(row["quantity"]),
        rate=float(row["rate"]),
        is_sub_item=bool(row["is_sub_item"]),
        parent_serial_no=row["parent_serial_no"],
    )


def parse_date(value: str | None) -> date:
    """Parse a stored ISO date, falling back to today."""
    if value:
        try:
            return date.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return date.today()


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a stored timestamp (ISO or SQLite ``datetime('now')`` form)."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return None
