"""SQLite implementation of invoice storage."""

from datetime import date, datetime

import aiosqlite

from src.config import get_logger, get_settings
from src.core.entities.billing import Invoice
from src.core.entities.common import DocumentStatus, Region
from src.core.entities.line_item import TopLevelItem
from src.core.exceptions import (
    ClientNotFoundError,
    DatabaseError,
    DuplicateDocumentNumberError,
    InvoiceNotFoundError,
)
from src.core.interfaces.invoice_store import IInvoiceStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.line_item_rows import (
    insert_items,
    load_items,
    parse_date,
    parse_datetime,
    replace_items,
)
from src.infrastructure.storage.sqlite.sequence_store import SQLiteDocumentSequencer, region_key

logger = get_logger(__name__)

ITEMS_TABLE = "invoice_items"


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice storage."""

    def __init__(self, padding: int | None = None):
        self._padding = padding

    @property
    def padding(self) -> int:
        if self._padding is None:
            self._padding = get_settings().billing.invoice_number_padding
        return self._padding

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Issue the region's next number and insert the invoice with its items."""
        now = datetime.utcnow()
        number = None
        try:
            async with get_transaction(immediate=True) as conn:
                number = await SQLiteDocumentSequencer.issue(conn, invoice.region, self.padding)
                cursor = await conn.execute(
                    """
                    INSERT INTO invoices (
                        invoice_number, client_id, region, event_id,
                        invoice_date, status, notes,
                        net_amount, vat_amount, total_amount, amount_paid,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                    """,
                    (
                        number,
                        invoice.client_id,
                        region_key(invoice.region),
                        invoice.event_id,
                        invoice.invoice_date.isoformat(),
                        invoice.status.value,
                        invoice.notes,
                        invoice.net_amount,
                        invoice.vat_amount,
                        invoice.total_amount,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
                invoice_id = cursor.lastrowid
                await insert_items(conn, ITEMS_TABLE, invoice_id, invoice.items)
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, invoice, number) from e
        except aiosqlite.Error as e:
            logger.error("invoice_create_failed", region=region_key(invoice.region), error=str(e))
            raise DatabaseError("create_invoice", str(e)) from e

        invoice.id = invoice_id
        invoice.invoice_number = number
        invoice.amount_paid = 0.0
        invoice.created_at = now
        invoice.updated_at = now

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=number,
            region=region_key(invoice.region),
            items=len(invoice.items),
            total=invoice.total_amount,
        )
        return invoice

    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM invoices WHERE id = ?", (invoice_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await load_items(conn, ITEMS_TABLE, invoice_id)
            return self._row_to_invoice(row, items)

    async def update_invoice(self, invoice: Invoice) -> Invoice:
        """Update header fields and replace the items. Number and amount_paid are kept."""
        if invoice.id is None:
            raise InvoiceNotFoundError(0)

        now = datetime.utcnow()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE invoices SET
                        client_id = ?, event_id = ?, invoice_date = ?,
                        status = ?, notes = ?,
                        net_amount = ?, vat_amount = ?, total_amount = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        invoice.client_id,
                        invoice.event_id,
                        invoice.invoice_date.isoformat(),
                        invoice.status.value,
                        invoice.notes,
                        invoice.net_amount,
                        invoice.vat_amount,
                        invoice.total_amount,
                        now.isoformat(),
                        invoice.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise InvoiceNotFoundError(invoice.id)
                await replace_items(conn, ITEMS_TABLE, invoice.id, invoice.items)
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, invoice, invoice.invoice_number) from e

        logger.info(
            "invoice_updated",
            invoice_id=invoice.id,
            items=len(invoice.items),
            total=invoice.total_amount,
        )
        updated = await self.get_invoice(invoice.id)
        if updated is None:
            raise InvoiceNotFoundError(invoice.id)
        return updated

    async def delete_invoice(self, invoice_id: int) -> bool:
        """Delete an invoice; items and payments cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("invoice_deleted", invoice_id=invoice_id)
        return deleted

    async def list_invoices(
        self,
        region: str | None = None,
        client_id: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoice headers, newest first."""
        conditions = []
        params: list = []

        if region:
            conditions.append("region = ?")
            params.append(region_key(region))
        if client_id is not None:
            conditions.append("client_id = ?")
            params.append(client_id)
        if from_date is not None:
            conditions.append("invoice_date >= ?")
            params.append(from_date.isoformat())
        if to_date is not None:
            conditions.append("invoice_date <= ?")
            params.append(to_date.isoformat())

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM invoices
                {where}
                ORDER BY invoice_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_invoice(row, []) for row in rows]

    @staticmethod
    def _integrity_error(
        error: aiosqlite.IntegrityError, invoice: Invoice, number: str | None
    ) -> Exception:
        message = str(error)
        if "invoices.invoice_number" in message and number:
            return DuplicateDocumentNumberError("invoice", number)
        if "FOREIGN KEY" in message:
            return ClientNotFoundError(invoice.client_id)
        logger.error("invoice_write_failed", invoice_id=invoice.id, error=message)
        return DatabaseError("write_invoice", message)

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[TopLevelItem]) -> Invoice:
        """Convert a database row to an Invoice entity.

        With items loaded the totals are recomputed by the entity; header-only
        rows keep the stored totals.
        """
        return Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            client_id=row["client_id"],
            region=Region(row["region"]),
            event_id=row["event_id"],
            invoice_date=parse_date(row["invoice_date"]),
            status=DocumentStatus(row["status"]),
            notes=row["notes"],
            items=items,
            net_amount=float(row["net_amount"]),
            vat_amount=float(row["vat_amount"]),
            total_amount=float(row["total_amount"]),
            amount_paid=float(row["amount_paid"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
