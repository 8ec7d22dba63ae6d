"""Build Client Ledger Use Case: statement of account as JSON or CSV."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.responses import LedgerResponse
from src.application.presenters import ledger_response
from src.config import get_logger
from src.core.entities import Client, Invoice, Ledger, Payment
from src.core.exceptions import ClientNotFoundError, ValidationError
from src.core.interfaces import IClientStore, IInvoiceStore, IPaymentStore
from src.core.services.currency import currency_code
from src.core.services.exports import render_ledger_csv
from src.core.services.ledger_builder import build_ledger

logger = get_logger(__name__)

PAGE_SIZE = 500


@dataclass
class LedgerResult:
    """A built ledger with the client it belongs to."""

    client: Client
    ledger: Ledger


class BuildClientLedgerUseCase:
    """
    Read a client's invoices and payments and build the statement.

    Every invoice of the client is loaded regardless of the window so that
    payments inside the window can always be attributed to their invoice.
    """

    def __init__(
        self,
        client_store: IClientStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        payment_store: IPaymentStore | None = None,
    ):
        self._client_store = client_store
        self._invoice_store = invoice_store
        self._payment_store = payment_store

    async def _get_client_store(self) -> IClientStore:
        if self._client_store is None:
            from src.infrastructure.storage.sqlite import get_client_store

            self._client_store = await get_client_store()
        return self._client_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from src.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from src.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def _client_invoices(self, client_id: int) -> list[Invoice]:
        store = await self._get_invoice_store()
        invoices: list[Invoice] = []
        offset = 0
        while True:
            page = await store.list_invoices(client_id=client_id, limit=PAGE_SIZE, offset=offset)
            invoices.extend(page)
            if len(page) < PAGE_SIZE:
                break
            offset += PAGE_SIZE
        # Oldest first, so same-day entries keep creation order
        return sorted(invoices, key=lambda inv: (inv.invoice_date, inv.id or 0))

    async def _invoice_payments(
        self, invoice_ids: list[int], from_date: date | None, to_date: date | None
    ) -> list[Payment]:
        if not invoice_ids:
            return []
        store = await self._get_payment_store()
        payments: list[Payment] = []
        offset = 0
        while True:
            page = await store.list_payments(
                invoice_ids=invoice_ids,
                from_date=from_date,
                to_date=to_date,
                limit=PAGE_SIZE,
                offset=offset,
            )
            payments.extend(page)
            if len(page) < PAGE_SIZE:
                break
            offset += PAGE_SIZE
        return sorted(payments, key=lambda p: (p.payment_date, p.id or 0))

    async def execute(
        self,
        client_id: int,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> LedgerResult:
        """Execute build ledger use case."""
        if from_date and to_date and from_date > to_date:
            raise ValidationError(
                "from_date", "from_date must not be after to_date", from_date.isoformat()
            )

        client = await (await self._get_client_store()).get_client(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)

        invoices = await self._client_invoices(client_id)
        payments = await self._invoice_payments(
            [inv.id for inv in invoices if inv.id is not None], from_date, to_date
        )

        ledger = build_ledger(client_id, from_date, to_date, invoices, payments)

        logger.info(
            "client_ledger_built",
            client_id=client_id,
            entries=len(ledger.entries),
            closing_balance=ledger.closing_balance,
        )
        return LedgerResult(client=client, ledger=ledger)

    def to_response(self, result: LedgerResult) -> LedgerResponse:
        """Convert result to API response."""
        return ledger_response(result.ledger, result.client)

    def to_csv(self, result: LedgerResult) -> str:
        """Render the statement as CSV in the client's currency."""
        return render_ledger_csv(
            result.ledger, result.client.name, currency_code(result.client.region)
        )
