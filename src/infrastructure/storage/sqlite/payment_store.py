"""
SQLite implementation of payment storage.

Every write changes the payment rows and the owning invoice's
``amount_paid`` in one transaction, so the stored total always equals the
sum of the invoice's payments.
"""

from datetime import date, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.common import PaymentMode, Region
from src.core.entities.payment import Payment
from src.core.exceptions import InvoiceNotFoundError, PaymentNotFoundError
from src.core.interfaces.payment_store import IPaymentStore
from src.core.money import round2
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.line_item_rows import parse_date, parse_datetime
from src.infrastructure.storage.sqlite.sequence_store import region_key

logger = get_logger(__name__)


async def _apply_to_invoice(
    conn: aiosqlite.Connection, invoice_id: int, delta: float, now: datetime
) -> Region:
    """Shift the invoice's amount_paid by ``delta``; returns the invoice region."""
    cursor = await conn.execute(
        """
        UPDATE invoices
        SET amount_paid = ROUND(amount_paid + ?, 2), updated_at = ?
        WHERE id = ?
        RETURNING region
        """,
        (delta, now.isoformat(), invoice_id),
    )
    row = await cursor.fetchone()
    await cursor.close()
    if row is None:
        raise InvoiceNotFoundError(invoice_id)
    return Region(row["region"])


class SQLitePaymentStore(IPaymentStore):
    """SQLite implementation of payment storage."""

    async def create_payment(self, payment: Payment) -> Payment:
        """Credit the invoice, then insert the payment row."""
        now = datetime.utcnow()
        async with get_transaction(immediate=True) as conn:
            # Invoice first: an unknown invoice aborts before anything is written
            region = await _apply_to_invoice(conn, payment.invoice_id, payment.amount, now)
            cursor = await conn.execute(
                """
                INSERT INTO payments (
                    invoice_id, region, amount, payment_date,
                    payment_mode, reference_number, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.invoice_id,
                    region.value,
                    payment.amount,
                    payment.payment_date.isoformat(),
                    payment.payment_mode.value,
                    payment.reference_number,
                    payment.notes,
                    now.isoformat(),
                ),
            )
            payment_id = cursor.lastrowid

        payment.id = payment_id
        payment.region = region
        payment.created_at = now

        logger.info(
            "payment_recorded",
            payment_id=payment.id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
            mode=payment.payment_mode.value,
        )
        return payment

    async def get_payment(self, payment_id: int) -> Payment | None:
        """Get payment by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM payments WHERE id = ?", (payment_id,))
            row = await cursor.fetchone()
            return self._row_to_payment(row) if row else None

    async def update_payment(self, payment: Payment) -> Payment:
        """Rewrite a payment and move the amount difference onto the invoice(s)."""
        if payment.id is None:
            raise PaymentNotFoundError(0)

        now = datetime.utcnow()
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                "SELECT invoice_id, amount FROM payments WHERE id = ?", (payment.id,)
            )
            old = await cursor.fetchone()
            if old is None:
                raise PaymentNotFoundError(payment.id)

            if old["invoice_id"] == payment.invoice_id:
                delta = round2(payment.amount - float(old["amount"]))
                region = await _apply_to_invoice(conn, payment.invoice_id, delta, now)
            else:
                await _apply_to_invoice(conn, old["invoice_id"], -float(old["amount"]), now)
                region = await _apply_to_invoice(conn, payment.invoice_id, payment.amount, now)

            await conn.execute(
                """
                UPDATE payments SET
                    invoice_id = ?, region = ?, amount = ?, payment_date = ?,
                    payment_mode = ?, reference_number = ?, notes = ?
                WHERE id = ?
                """,
                (
                    payment.invoice_id,
                    region.value,
                    payment.amount,
                    payment.payment_date.isoformat(),
                    payment.payment_mode.value,
                    payment.reference_number,
                    payment.notes,
                    payment.id,
                ),
            )

        payment.region = region
        logger.info(
            "payment_updated",
            payment_id=payment.id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
        )
        return payment

    async def delete_payment(self, payment_id: int) -> Payment:
        """Delete a payment and debit its amount back from the invoice."""
        now = datetime.utcnow()
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                "DELETE FROM payments WHERE id = ? RETURNING *", (payment_id,)
            )
            row = await cursor.fetchone()
            await cursor.close()
            if row is None:
                raise PaymentNotFoundError(payment_id)
            payment = self._row_to_payment(row)
            await _apply_to_invoice(conn, payment.invoice_id, -payment.amount, now)

        logger.info(
            "payment_deleted",
            payment_id=payment_id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
        )
        return payment

    async def list_payments(
        self,
        region: str | None = None,
        invoice_ids: list[int] | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> list[Payment]:
        """List payments, newest first."""
        if invoice_ids is not None and not invoice_ids:
            return []

        conditions = []
        params: list = []

        if region:
            conditions.append("region = ?")
            params.append(region_key(region))
        if invoice_ids:
            placeholders = ", ".join("?" for _ in invoice_ids)
            conditions.append(f"invoice_id IN ({placeholders})")
            params.extend(invoice_ids)
        if from_date is not None:
            conditions.append("payment_date >= ?")
            params.append(from_date.isoformat())
        if to_date is not None:
            conditions.append("payment_date <= ?")
            params.append(to_date.isoformat())

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM payments
                {where}
                ORDER BY payment_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_payment(row) for row in rows]

    async def reconcile_amount_paid(self, invoice_id: int) -> float:
        """Recompute amount_paid from the stored payment rows."""
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                """
                UPDATE invoices
                SET amount_paid = (
                    SELECT COALESCE(ROUND(SUM(amount), 2), 0)
                    FROM payments WHERE payments.invoice_id = invoices.id
                )
                WHERE id = ?
                RETURNING amount_paid
                """,
                (invoice_id,),
            )
            row = await cursor.fetchone()
            await cursor.close()
            if row is None:
                raise InvoiceNotFoundError(invoice_id)
            amount_paid = float(row["amount_paid"])

        logger.info("amount_paid_reconciled", invoice_id=invoice_id, amount_paid=amount_paid)
        return amount_paid

    @staticmethod
    def _row_to_payment(row: aiosqlite.Row) -> Payment:
        """Convert a database row to a Payment entity."""
        return Payment(
            id=row["id"],
            invoice_id=row["invoice_id"],
            region=Region(row["region"]) if row["region"] else None,
            amount=float(row["amount"]),
            payment_date=parse_date(row["payment_date"]),
            payment_mode=PaymentMode(row["payment_mode"]),
            reference_number=row["reference_number"],
            notes=row["notes"],
            created_at=parse_datetime(row["created_at"]),
        )
