"""SQLite-backed stores sharing one connection pool."""

from typing import TypeVar

from src.infrastructure.storage.sqlite.client_store import SQLiteClientStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from src.infrastructure.storage.sqlite.payment_store import SQLitePaymentStore
from src.infrastructure.storage.sqlite.quotation_store import SQLiteQuotationStore
from src.infrastructure.storage.sqlite.sequence_store import SQLiteDocumentSequencer

T = TypeVar("T")

# One instance per store class for the life of the process
_instances: dict[type, object] = {}


def _shared(store_cls: type[T]) -> T:
    if store_cls not in _instances:
        _instances[store_cls] = store_cls()
    return _instances[store_cls]  # type: ignore[return-value]


async def get_client_store() -> SQLiteClientStore:
    return _shared(SQLiteClientStore)


async def get_invoice_store() -> SQLiteInvoiceStore:
    return _shared(SQLiteInvoiceStore)


async def get_quotation_store() -> SQLiteQuotationStore:
    return _shared(SQLiteQuotationStore)


async def get_payment_store() -> SQLitePaymentStore:
    return _shared(SQLitePaymentStore)


async def get_sequencer() -> SQLiteDocumentSequencer:
    return _shared(SQLiteDocumentSequencer)


__all__ = [
    "ConnectionPool",
    "close_pool",
    "get_connection",
    "get_pool",
    "get_transaction",
    "SQLiteClientStore",
    "SQLiteDocumentSequencer",
    "SQLiteInvoiceStore",
    "SQLitePaymentStore",
    "SQLiteQuotationStore",
    "get_client_store",
    "get_invoice_store",
    "get_payment_store",
    "get_quotation_store",
    "get_sequencer",
]
