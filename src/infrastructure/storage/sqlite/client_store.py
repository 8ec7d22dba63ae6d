"""SQLite implementation of client storage."""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.client import Client
from src.core.entities.common import Region
from src.core.interfaces.client_store import IClientStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.line_item_rows import parse_datetime
from src.infrastructure.storage.sqlite.sequence_store import region_key

logger = get_logger(__name__)


class SQLiteClientStore(IClientStore):
    """SQLite implementation of client storage."""

    async def create_client(self, client: Client) -> Client:
        now = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO clients (name, region, email, phone, address, trn, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    client.name,
                    region_key(client.region),
                    client.email,
                    client.phone,
                    client.address,
                    client.trn,
                    now.isoformat(),
                ),
            )
            client.id = cursor.lastrowid
            client.created_at = now

        logger.info("client_created", client_id=client.id, region=region_key(client.region))
        return client

    async def get_client(self, client_id: int) -> Client | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM clients WHERE id = ?", (client_id,))
            row = await cursor.fetchone()
            return self._row_to_client(row) if row else None

    async def list_clients(
        self, region: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Client]:
        async with get_connection() as conn:
            if region:
                cursor = await conn.execute(
                    "SELECT * FROM clients WHERE region = ? ORDER BY name, id LIMIT ? OFFSET ?",
                    (region_key(region), limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM clients ORDER BY name, id LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_client(row) for row in rows]

    @staticmethod
    def _row_to_client(row: aiosqlite.Row) -> Client:
        return Client(
            id=row["id"],
            name=row["name"],
            region=Region(row["region"]),
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            trn=row["trn"],
            created_at=parse_datetime(row["created_at"]),
        )
