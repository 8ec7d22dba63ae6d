"""Update Payment Use Case."""

from src.application.dto.requests import UpdatePaymentRequest
from src.application.dto.responses import PaymentResponse
from src.application.presenters import payment_response
from src.application.use_cases.record_payment import PaymentResult
from src.config import get_logger
from src.core.entities import Payment
from src.core.exceptions import PaymentNotFoundError
from src.core.interfaces import IInvoiceStore, IPaymentStore

logger = get_logger(__name__)


class UpdatePaymentUseCase:
    """Edit a payment; the store shifts amount_paid by the difference."""

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

    async def execute(self, payment_id: int, request: UpdatePaymentRequest) -> PaymentResult:
        """Execute update payment use case."""
        store = await self._get_payment_store()
        existing = await store.get_payment(payment_id)
        if existing is None:
            raise PaymentNotFoundError(payment_id)

        changes = {
            k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None
        }
        payment = Payment.model_validate({**existing.model_dump(), **changes})
        payment = await store.update_payment(payment)

        invoice = await (await self._get_invoice_store()).get_invoice(payment.invoice_id)
        logger.info(
            "update_payment_complete",
            payment_id=payment.id,
            previous_amount=existing.amount,
            amount=payment.amount,
        )
        return PaymentResult(payment=payment, invoice=invoice)

    def to_response(self, result: PaymentResult) -> PaymentResponse:
        """Convert result to API response."""
        return payment_response(result.payment, result.invoice)
