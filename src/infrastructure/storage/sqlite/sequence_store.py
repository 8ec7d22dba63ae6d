"""SQLite implementation of the region-scoped invoice number sequencer."""

import aiosqlite

from src.config import get_logger, get_settings
from src.core.entities.common import Region
from src.core.entities.sequence import DocumentSequence
from src.core.exceptions import SequenceError, SequenceIssueError, SequenceNotFoundError
from src.core.interfaces.sequencer import IDocumentSequencer
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def region_key(region: Region | str) -> str:
    """Stored value of a region enum or code. Codes are matched case-sensitively."""
    return str(getattr(region, "value", region))


class SQLiteDocumentSequencer(IDocumentSequencer):
    """
    Gapless invoice numbering backed by the ``document_sequences`` table.

    Issuing is a single ``UPDATE ... RETURNING`` statement, so the increment
    and the read of the new value cannot be separated by another writer.
    """

    def __init__(self, padding: int | None = None):
        self._padding = padding

    @property
    def padding(self) -> int:
        if self._padding is None:
            self._padding = get_settings().billing.invoice_number_padding
        return self._padding

    @staticmethod
    async def issue(conn: aiosqlite.Connection, region: Region | str, padding: int) -> str:
        """
        Increment and read the region's counter on an open transaction.

        The caller owns the transaction: if it rolls back, the increment is
        rolled back with it and the number is never considered issued.
        """
        key = region_key(region)
        cursor = await conn.execute(
            """
            UPDATE document_sequences
            SET current_number = current_number + 1
            WHERE region = ?
            RETURNING prefix, current_number
            """,
            (key,),
        )
        row = await cursor.fetchone()
        await cursor.close()
        if row is None:
            raise SequenceNotFoundError(key)
        return DocumentSequence.format_number(row["prefix"], row["current_number"], padding)

    async def next_number(self, region: str) -> str:
        """Issue the next number for ``region`` in its own transaction."""
        key = region_key(region)
        try:
            async with get_transaction(immediate=True) as conn:
                number = await self.issue(conn, key, self.padding)
        except SequenceError:
            raise
        except aiosqlite.Error as e:
            logger.error("invoice_number_issue_failed", region=key, error=str(e))
            raise SequenceIssueError(key, str(e)) from e

        logger.info("invoice_number_issued", region=key, invoice_number=number)
        return number

    async def peek_next_number(self, region: str) -> str:
        sequence = await self.get_sequence(region)
        if sequence is None:
            raise SequenceNotFoundError(region_key(region))
        return sequence.preview_next(self.padding)

    async def get_sequence(self, region: str) -> DocumentSequence | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM document_sequences WHERE region = ?",
                (region_key(region),),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return DocumentSequence(
                id=row["id"],
                region=Region(row["region"]),
                prefix=row["prefix"],
                current_number=row["current_number"],
            )
