"""
Payment endpoints.

Every write adjusts the owning invoice's amount paid in the same
transaction; responses carry the invoice balance after the change.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_delete_payment_use_case,
    get_payments,
    get_record_payment_use_case,
    get_update_payment_use_case,
)
from src.application.dto.requests import RecordPaymentRequest, UpdatePaymentRequest
from src.application.dto.responses import (
    ErrorResponse,
    PaymentListResponse,
    PaymentResponse,
)
from src.application.presenters import payment_response
from src.application.use_cases import (
    DeletePaymentUseCase,
    RecordPaymentUseCase,
    UpdatePaymentUseCase,
)
from src.core.entities import Region
from src.core.interfaces import IPaymentStore

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Invoice not found"},
    },
)
async def record_payment(
    request: RecordPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> PaymentResponse:
    """Record a payment against an invoice."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    region: Region | None = Query(default=None, description="Filter by region"),
    invoice_id: int | None = Query(default=None, description="Filter by invoice"),
    from_date: date | None = Query(default=None),
    to_date: date | None = Query(default=None),
    limit: int = Query(default=1000, ge=1, le=5000),
    offset: int = Query(default=0, ge=0),
    store: IPaymentStore = Depends(get_payments),
) -> PaymentListResponse:
    """List payments, newest first."""
    payments = await store.list_payments(
        region=region.value if region else None,
        invoice_ids=[invoice_id] if invoice_id is not None else None,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
        offset=offset,
    )
    return PaymentListResponse(
        payments=[payment_response(p) for p in payments],
        total=len(payments),
    )


@router.put(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequest,
    use_case: UpdatePaymentUseCase = Depends(get_update_payment_use_case),
) -> PaymentResponse:
    """Edit a payment."""
    result = await use_case.execute(payment_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_payment(
    payment_id: int,
    use_case: DeletePaymentUseCase = Depends(get_delete_payment_use_case),
) -> PaymentResponse:
    """Delete a payment. Returns the removed payment and the invoice balance after."""
    result = await use_case.execute(payment_id)
    return use_case.to_response(result)
