"""Export Invoices Use Case: invoice register as CSV."""

from dataclasses import dataclass
from datetime import date

from src.config import get_logger
from src.core.entities import Invoice
from src.core.interfaces import IClientStore, IInvoiceStore
from src.core.services.exports import render_invoices_csv

logger = get_logger(__name__)

PAGE_SIZE = 500


@dataclass
class InvoiceExportResult:
    """Rendered CSV export."""

    content: str
    filename: str
    count: int


class ExportInvoicesUseCase:
    """Export every invoice matching the filters, with a totals row."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        client_store: IClientStore | None = None,
    ):
        self._invoice_store = invoice_store
        self._client_store = client_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from src.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_client_store(self) -> IClientStore:
        if self._client_store is None:
            from src.infrastructure.storage.sqlite import get_client_store

            self._client_store = await get_client_store()
        return self._client_store

    async def execute(
        self,
        region: str | None = None,
        client_id: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> InvoiceExportResult:
        """Execute invoice export use case."""
        store = await self._get_invoice_store()
        invoices: list[Invoice] = []
        offset = 0
        while True:
            page = await store.list_invoices(
                region=region,
                client_id=client_id,
                from_date=from_date,
                to_date=to_date,
                limit=PAGE_SIZE,
                offset=offset,
            )
            invoices.extend(page)
            if len(page) < PAGE_SIZE:
                break
            offset += PAGE_SIZE

        client_store = await self._get_client_store()
        client_names: dict[int, str] = {}
        for client_id_ in sorted({inv.client_id for inv in invoices}):
            client = await client_store.get_client(client_id_)
            if client is not None:
                client_names[client_id_] = client.name

        content = render_invoices_csv(invoices, client_names)
        filename = f"invoices_{date.today().isoformat()}.csv"

        logger.info("invoices_exported", count=len(invoices), region=region)
        return InvoiceExportResult(content=content, filename=filename, count=len(invoices))
