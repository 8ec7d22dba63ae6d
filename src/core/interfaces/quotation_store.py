"""Abstract interface for quotation storage."""

from abc import ABC, abstractmethod

from src.core.entities.billing import Quotation


class IQuotationStore(ABC):
    """Interface for quotation persistence."""

    @abstractmethod
    async def create_quotation(self, quotation: Quotation) -> Quotation:
        """Persist a new quotation with its items."""
        pass

    @abstractmethod
    async def get_quotation(self, quotation_id: int) -> Quotation | None:
        """Get quotation by ID with items."""
        pass

    @abstractmethod
    async def update_quotation(self, quotation: Quotation) -> Quotation:
        """Update header fields and replace all items."""
        pass

    @abstractmethod
    async def delete_quotation(self, quotation_id: int) -> bool:
        """Delete a quotation with its items."""
        pass

    @abstractmethod
    async def list_quotations(
        self, region: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Quotation]:
        """List quotation headers (without items), newest first."""
        pass
