"""Delete Payment Use Case."""

from src.application.dto.responses import PaymentResponse
from src.application.presenters import payment_response
from src.application.use_cases.record_payment import PaymentResult
from src.config import get_logger
from src.core.interfaces import IInvoiceStore, IPaymentStore

logger = get_logger(__name__)


class DeletePaymentUseCase:
    """Remove a payment; the store debits its amount back from the invoice."""

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

    async def execute(self, payment_id: int) -> PaymentResult:
        """Execute delete payment use case. Unknown IDs raise PaymentNotFoundError."""
        payment = await (await self._get_payment_store()).delete_payment(payment_id)
        invoice = await (await self._get_invoice_store()).get_invoice(payment.invoice_id)
        logger.info(
            "delete_payment_complete",
            payment_id=payment_id,
            invoice_id=payment.invoice_id,
            balance=invoice.balance if invoice else None,
        )
        return PaymentResult(payment=payment, invoice=invoice)

    def to_response(self, result: PaymentResult) -> PaymentResponse:
        """Convert result to API response."""
        return payment_response(result.payment, result.invoice)
