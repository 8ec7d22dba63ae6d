"""Create Invoice Use Case: items to totals to sequenced number to persisted invoice."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.requests import CreateInvoiceRequest
from src.application.dto.responses import InvoiceResponse
from src.application.presenters import invoice_response, items_from_request
from src.config import get_logger
from src.core.entities import Client, Invoice, Region
from src.core.exceptions import ClientNotFoundError, ValidationError
from src.core.interfaces import IClientStore, IInvoiceStore

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice


async def resolve_region(
    client_store: IClientStore, client_id: int, region: Region | None
) -> tuple[Client, Region]:
    """Load the client and settle the document region against it."""
    client = await client_store.get_client(client_id)
    if client is None:
        raise ClientNotFoundError(client_id)
    if region is not None and region != client.region:
        raise ValidationError(
            "region",
            f"Client {client_id} belongs to region {client.region.value}",
            region.value,
        )
    return client, client.region


class CreateInvoiceUseCase:
    """Create a tax invoice. The number is issued by the store on insert."""

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

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        """Execute create invoice use case."""
        logger.info(
            "create_invoice_started",
            client_id=request.client_id,
            items=len(request.items),
        )

        _, region = await resolve_region(
            await self._get_client_store(), request.client_id, request.region
        )

        # Totals are computed by the entity from the items
        invoice = Invoice(
            client_id=request.client_id,
            region=region,
            event_id=request.event_id,
            invoice_date=request.invoice_date or date.today(),
            status=request.status,
            notes=request.notes,
            items=items_from_request(request.items),
        )

        store = await self._get_invoice_store()
        invoice = await store.create_invoice(invoice)

        logger.info(
            "create_invoice_complete",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=invoice.total_amount,
        )
        return CreateInvoiceResult(invoice=invoice)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_response(result.invoice)
