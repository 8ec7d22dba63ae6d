"""Update Invoice Use Case."""

from dataclasses import dataclass
from typing import Any

from src.application.dto.requests import UpdateInvoiceRequest
from src.application.dto.responses import InvoiceResponse
from src.application.presenters import invoice_response, items_from_request
from src.application.use_cases.create_invoice import resolve_region
from src.config import get_logger
from src.core.entities import Invoice
from src.core.exceptions import InvoiceNotFoundError
from src.core.interfaces import IClientStore, IInvoiceStore
from src.core.services.line_items import aggregate

logger = get_logger(__name__)


@dataclass
class UpdateInvoiceResult:
    """Result of updating an invoice."""

    invoice: Invoice
    items_replaced: bool


class UpdateInvoiceUseCase:
    """
    Edit an invoice.

    A new item list replaces the old one wholesale and the totals are
    recomputed from it. The invoice number and amount paid never change here.
    """

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

    async def execute(self, invoice_id: int, request: UpdateInvoiceRequest) -> UpdateInvoiceResult:
        """Execute update invoice use case."""
        store = await self._get_invoice_store()
        existing = await store.get_invoice(invoice_id)
        if existing is None:
            raise InvoiceNotFoundError(invoice_id)

        changes: dict[str, Any] = request.model_dump(exclude_unset=True, exclude={"items"})
        if "client_id" in changes and changes["client_id"] != existing.client_id:
            # The number prefix is tied to the region, so a client move must stay in it
            client_store = await self._get_client_store()
            await resolve_region(client_store, changes["client_id"], existing.region)

        data = existing.model_dump(exclude={"balance", "items"})
        data.update({k: v for k, v in changes.items() if v is not None})
        if request.items is not None:
            data["items"] = items_from_request(request.items)
            # An emptied item list must zero the totals as well
            data.update(aggregate(data["items"]).model_dump())
        else:
            data["items"] = existing.items
        invoice = Invoice.model_validate(data)

        invoice = await store.update_invoice(invoice)

        logger.info(
            "update_invoice_complete",
            invoice_id=invoice.id,
            items_replaced=request.items is not None,
            total=invoice.total_amount,
        )
        return UpdateInvoiceResult(invoice=invoice, items_replaced=request.items is not None)

    def to_response(self, result: UpdateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_response(result.invoice)
