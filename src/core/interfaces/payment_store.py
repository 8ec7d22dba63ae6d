"""Abstract interface for payment storage."""

from abc import ABC, abstractmethod
from datetime import date

from src.core.entities.payment import Payment


class IPaymentStore(ABC):
    """
    Interface for payment persistence.

    Every mutation keeps ``invoices.amount_paid`` equal to the sum of the
    invoice's payments within a single transaction.
    """

    @abstractmethod
    async def create_payment(self, payment: Payment) -> Payment:
        """Insert a payment and add its amount to the invoice's amount_paid."""
        pass

    @abstractmethod
    async def get_payment(self, payment_id: int) -> Payment | None:
        """Get payment by ID."""
        pass

    @abstractmethod
    async def update_payment(self, payment: Payment) -> Payment:
        """Update a payment and shift amount_paid by the amount difference."""
        pass

    @abstractmethod
    async def delete_payment(self, payment_id: int) -> Payment:
        """Delete a payment and subtract its amount from amount_paid."""
        pass

    @abstractmethod
    async def list_payments(
        self,
        region: str | None = None,
        invoice_ids: list[int] | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> list[Payment]:
        """List payments, newest first."""
        pass

    @abstractmethod
    async def reconcile_amount_paid(self, invoice_id: int) -> float:
        """Recompute amount_paid from the payment rows and return it."""
        pass
