"""Create Quotation Use Case."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.requests import CreateQuotationRequest
from src.application.dto.responses import QuotationResponse
from src.application.presenters import items_from_request, quotation_response
from src.application.use_cases.create_invoice import resolve_region
from src.config import get_logger
from src.core.entities import Quotation
from src.core.interfaces import IClientStore, IQuotationStore

logger = get_logger(__name__)


@dataclass
class CreateQuotationResult:
    """Result of creating a quotation."""

    quotation: Quotation


class CreateQuotationUseCase:
    """Create a quotation. Quotation numbers do not consume invoice numbers."""

    def __init__(
        self,
        quotation_store: IQuotationStore | None = None,
        client_store: IClientStore | None = None,
    ):
        self._quotation_store = quotation_store
        self._client_store = client_store

    async def _get_quotation_store(self) -> IQuotationStore:
        if self._quotation_store is None:
            from src.infrastructure.storage.sqlite import get_quotation_store

            self._quotation_store = await get_quotation_store()
        return self._quotation_store

    async def _get_client_store(self) -> IClientStore:
        if self._client_store is None:
            from src.infrastructure.storage.sqlite import get_client_store

            self._client_store = await get_client_store()
        return self._client_store

    async def execute(self, request: CreateQuotationRequest) -> CreateQuotationResult:
        """Execute create quotation use case."""
        logger.info(
            "create_quotation_started",
            client_id=request.client_id,
            items=len(request.items),
        )

        _, region = await resolve_region(
            await self._get_client_store(), request.client_id, request.region
        )

        quotation = Quotation(
            client_id=request.client_id,
            region=region,
            quotation_number=request.quotation_number,
            event_id=request.event_id,
            quotation_date=request.quotation_date or date.today(),
            status=request.status,
            notes=request.notes,
            items=items_from_request(request.items),
        )

        store = await self._get_quotation_store()
        quotation = await store.create_quotation(quotation)

        logger.info(
            "create_quotation_complete",
            quotation_id=quotation.id,
            quotation_number=quotation.quotation_number,
            total=quotation.total_amount,
        )
        return CreateQuotationResult(quotation=quotation)

    def to_response(self, result: CreateQuotationResult) -> QuotationResponse:
        """Convert result to API response."""
        return quotation_response(result.quotation)
