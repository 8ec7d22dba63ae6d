"""SQLite implementation of quotation storage."""

import time
from datetime import datetime

import aiosqlite

from src.config import get_logger, get_settings
from src.core.entities.billing import Quotation
from src.core.entities.common import DocumentStatus, Region
from src.core.entities.line_item import TopLevelItem
from src.core.exceptions import (
    ClientNotFoundError,
    DatabaseError,
    DuplicateDocumentNumberError,
    QuotationNotFoundError,
)
from src.core.interfaces.quotation_store import IQuotationStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.line_item_rows import (
    insert_items,
    load_items,
    parse_date,
    parse_datetime,
    replace_items,
)
from src.infrastructure.storage.sqlite.sequence_store import region_key

logger = get_logger(__name__)

ITEMS_TABLE = "quotation_items"


def generate_quotation_number(prefix: str | None = None) -> str:
    """Timestamp-based quotation number, e.g. ``Q-1718000000000``."""
    prefix = prefix if prefix is not None else get_settings().billing.quotation_prefix
    return f"{prefix}{int(time.time() * 1000)}"


class SQLiteQuotationStore(IQuotationStore):
    """SQLite implementation of quotation storage. Numbers do not use the sequencer."""

    async def create_quotation(self, quotation: Quotation) -> Quotation:
        """Insert a quotation with its items."""
        now = datetime.utcnow()
        number = quotation.quotation_number or generate_quotation_number()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO quotations (
                        quotation_number, client_id, region, event_id,
                        quotation_date, status, notes,
                        net_amount, vat_amount, total_amount,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        number,
                        quotation.client_id,
                        region_key(quotation.region),
                        quotation.event_id,
                        quotation.quotation_date.isoformat(),
                        quotation.status.value,
                        quotation.notes,
                        quotation.net_amount,
                        quotation.vat_amount,
                        quotation.total_amount,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
                quotation_id = cursor.lastrowid
                await insert_items(conn, ITEMS_TABLE, quotation_id, quotation.items)
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, quotation, number) from e

        quotation.id = quotation_id
        quotation.quotation_number = number
        quotation.created_at = now
        quotation.updated_at = now

        logger.info(
            "quotation_created",
            quotation_id=quotation.id,
            quotation_number=number,
            items=len(quotation.items),
            total=quotation.total_amount,
        )
        return quotation

    async def get_quotation(self, quotation_id: int) -> Quotation | None:
        """Get quotation by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM quotations WHERE id = ?", (quotation_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await load_items(conn, ITEMS_TABLE, quotation_id)
            return self._row_to_quotation(row, items)

    async def update_quotation(self, quotation: Quotation) -> Quotation:
        """Update header fields, including the number, and replace the items."""
        if quotation.id is None:
            raise QuotationNotFoundError(0)

        now = datetime.utcnow()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE quotations SET
                        quotation_number = COALESCE(?, quotation_number),
                        client_id = ?, region = ?, event_id = ?,
                        quotation_date = ?, status = ?, notes = ?,
                        net_amount = ?, vat_amount = ?, total_amount = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        quotation.quotation_number,
                        quotation.client_id,
                        region_key(quotation.region),
                        quotation.event_id,
                        quotation.quotation_date.isoformat(),
                        quotation.status.value,
                        quotation.notes,
                        quotation.net_amount,
                        quotation.vat_amount,
                        quotation.total_amount,
                        now.isoformat(),
                        quotation.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise QuotationNotFoundError(quotation.id)
                await replace_items(conn, ITEMS_TABLE, quotation.id, quotation.items)
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, quotation, quotation.quotation_number) from e

        logger.info("quotation_updated", quotation_id=quotation.id, items=len(quotation.items))
        updated = await self.get_quotation(quotation.id)
        if updated is None:
            raise QuotationNotFoundError(quotation.id)
        return updated

    async def delete_quotation(self, quotation_id: int) -> bool:
        """Delete a quotation; items cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM quotations WHERE id = ?", (quotation_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("quotation_deleted", quotation_id=quotation_id)
        return deleted

    async def list_quotations(
        self, region: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Quotation]:
        """List quotation headers, newest first."""
        async with get_connection() as conn:
            if region:
                cursor = await conn.execute(
                    """
                    SELECT * FROM quotations WHERE region = ?
                    ORDER BY quotation_date DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (region_key(region), limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM quotations
                    ORDER BY quotation_date DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_quotation(row, []) for row in rows]

    @staticmethod
    def _integrity_error(
        error: aiosqlite.IntegrityError, quotation: Quotation, number: str | None
    ) -> Exception:
        message = str(error)
        if "quotations.quotation_number" in message and number:
            return DuplicateDocumentNumberError("quotation", number)
        if "FOREIGN KEY" in message:
            return ClientNotFoundError(quotation.client_id)
        logger.error("quotation_write_failed", quotation_id=quotation.id, error=message)
        return DatabaseError("write_quotation", message)

    @staticmethod
    def _row_to_quotation(row: aiosqlite.Row, items: list[TopLevelItem]) -> Quotation:
        """Convert a database row to a Quotation entity."""
        return Quotation(
            id=row["id"],
            quotation_number=row["quotation_number"],
            client_id=row["client_id"],
            region=Region(row["region"]),
            event_id=row["event_id"],
            quotation_date=parse_date(row["quotation_date"]),
            status=DocumentStatus(row["status"]),
            notes=row["notes"],
            items=items,
            net_amount=float(row["net_amount"]),
            vat_amount=float(row["vat_amount"]),
            total_amount=float(row["total_amount"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
