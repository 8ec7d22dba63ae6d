"""Abstract interface for invoice storage."""

from abc import ABC, abstractmethod
from datetime import date

from src.core.entities.billing import Invoice


class IInvoiceStore(ABC):
    """Interface for invoice persistence."""

    @abstractmethod
    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """
        Persist a new invoice with its items.

        The invoice number is issued by the region's sequence inside the same
        transaction as the insert; any number on the input is ignored.
        """
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items."""
        pass

    @abstractmethod
    async def update_invoice(self, invoice: Invoice) -> Invoice:
        """
        Update header fields and replace all items.

        ``invoice_number`` and ``amount_paid`` are never written here.
        """
        pass

    @abstractmethod
    async def delete_invoice(self, invoice_id: int) -> bool:
        """Delete an invoice with its items and payments."""
        pass

    @abstractmethod
    async def list_invoices(
        self,
        region: str | None = None,
        client_id: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoice headers (without items), newest first."""
        pass
