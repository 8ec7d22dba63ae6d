"""Record Payment Use Case."""

from dataclasses import dataclass
from datetime import date

from src.application.dto.requests import RecordPaymentRequest
from src.application.dto.responses import PaymentResponse
from src.application.presenters import payment_response
from src.config import get_logger
from src.core.entities import Invoice, Payment
from src.core.interfaces import IInvoiceStore, IPaymentStore

logger = get_logger(__name__)


@dataclass
class PaymentResult:
    """A payment together with its invoice after the change."""

    payment: Payment
    invoice: Invoice | None


class RecordPaymentUseCase:
    """
    Record money received against an invoice.

    The store credits the invoice and inserts the payment atomically; the
    refreshed invoice is returned so callers see the new balance.
    """

    def __init__(
        self,
        payment_store: IPaymentStore | None = None,
        invoice_store: IInvoiceStore | None = None,
    ):
        self._payment_store = payment_store
        self._invoice_store = invoice_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from src.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from src.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def execute(self, request: RecordPaymentRequest) -> PaymentResult:
        """Execute record payment use case."""
        payment = Payment(
            invoice_id=request.invoice_id,
            amount=request.amount,
            payment_date=request.payment_date or date.today(),
            payment_mode=request.payment_mode,
            reference_number=request.reference_number,
            notes=request.notes,
        )

        payment = await (await self._get_payment_store()).create_payment(payment)
        invoice = await (await self._get_invoice_store()).get_invoice(payment.invoice_id)

        if invoice is not None and invoice.balance < 0:
            logger.warning(
                "invoice_overpaid",
                invoice_id=invoice.id,
                amount_paid=invoice.amount_paid,
                total=invoice.total_amount,
            )

        return PaymentResult(payment=payment, invoice=invoice)

    def to_response(self, result: PaymentResult) -> PaymentResponse:
        """Convert result to API response."""
        return payment_response(result.payment, result.invoice)
