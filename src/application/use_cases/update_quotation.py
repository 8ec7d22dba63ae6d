"""Update Quotation Use Case."""

from dataclasses import dataclass
from typing import Any

from src.application.dto.requests import UpdateQuotationRequest
from src.application.dto.responses import QuotationResponse
from src.application.presenters import items_from_request, quotation_response
from src.application.use_cases.create_invoice import resolve_region
from src.config import get_logger
from src.core.entities import Quotation
from src.core.exceptions import QuotationNotFoundError
from src.core.interfaces import IClientStore, IQuotationStore
from src.core.services.line_items import aggregate

logger = get_logger(__name__)


@dataclass
class UpdateQuotationResult:
    """Result of updating a quotation."""

    quotation: Quotation
    items_replaced: bool


class UpdateQuotationUseCase:
    """Edit a quotation, replacing its items wholesale when new ones are given."""

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

    async def execute(
        self, quotation_id: int, request: UpdateQuotationRequest
    ) -> UpdateQuotationResult:
        """Execute update quotation use case."""
        store = await self._get_quotation_store()
        existing = await store.get_quotation(quotation_id)
        if existing is None:
            raise QuotationNotFoundError(quotation_id)

        changes: dict[str, Any] = request.model_dump(exclude_unset=True, exclude={"items"})
        if "client_id" in changes and changes["client_id"] != existing.client_id:
            client_store = await self._get_client_store()
            await resolve_region(client_store, changes["client_id"], existing.region)

        data = existing.model_dump(exclude={"items"})
        data.update({k: v for k, v in changes.items() if v is not None})
        if request.items is not None:
            data["items"] = items_from_request(request.items)
            data.update(aggregate(data["items"]).model_dump())
        else:
            data["items"] = existing.items
        quotation = Quotation.model_validate(data)

        quotation = await store.update_quotation(quotation)

        logger.info(
            "update_quotation_complete",
            quotation_id=quotation.id,
            items_replaced=request.items is not None,
            total=quotation.total_amount,
        )
        return UpdateQuotationResult(quotation=quotation, items_replaced=request.items is not None)

    def to_response(self, result: UpdateQuotationResult) -> QuotationResponse:
        """Convert result to API response."""
        return quotation_response(result.quotation)
