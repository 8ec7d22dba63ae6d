"""
Invoice management endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from src.api.dependencies import (
    get_create_invoice_use_case,
    get_export_invoices_use_case,
    get_invoices,
    get_update_invoice_use_case,
)
from src.application.dto.requests import CreateInvoiceRequest, UpdateInvoiceRequest
from src.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from src.application.presenters import invoice_response
from src.application.use_cases import (
    CreateInvoiceUseCase,
    ExportInvoicesUseCase,
    UpdateInvoiceUseCase,
)
from src.core.entities import Region
from src.core.interfaces import IInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Client or sequence not found"},
        503: {"model": ErrorResponse, "description": "No invoice number issued"},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """
    Create a tax invoice.

    Totals are computed from the items and the next number of the region's
    sequence is issued in the same transaction as the insert.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    region: Region | None = Query(default=None, description="Filter by region"),
    client_id: int | None = Query(default=None, description="Filter by client"),
    from_date: date | None = Query(default=None, description="Invoice date from (inclusive)"),
    to_date: date | None = Query(default=None, description="Invoice date to (inclusive)"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IInvoiceStore = Depends(get_invoices),
) -> InvoiceListResponse:
    """List invoice headers, newest first."""
    invoices = await store.list_invoices(
        region=region.value if region else None,
        client_id=client_id,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
        offset=offset,
    )
    return InvoiceListResponse(
        invoices=[invoice_response(inv) for inv in invoices],
        total=len(invoices),
        limit=limit,
        offset=offset,
        has_more=len(invoices) == limit,
    )


@router.get("/export", response_model=None)
async def export_invoices(
    region: Region | None = Query(default=None, description="Filter by region"),
    client_id: int | None = Query(default=None, description="Filter by client"),
    from_date: date | None = Query(default=None),
    to_date: date | None = Query(default=None),
    use_case: ExportInvoicesUseCase = Depends(get_export_invoices_use_case),
) -> StreamingResponse:
    """Export the invoice register as CSV with a totals row."""
    result = await use_case.execute(
        region=region.value if region else None,
        client_id=client_id,
        from_date=from_date,
        to_date=to_date,
    )
    return StreamingResponse(
        iter([result.content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
        },
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    store: IInvoiceStore = Depends(get_invoices),
) -> InvoiceResponse:
    """Get an invoice with its items, balance and amount in words."""
    invoice = await store.get_invoice(invoice_id)
    if invoice is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Invoice not found: {invoice_id}",
        )
    return invoice_response(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequest,
    use_case: UpdateInvoiceUseCase = Depends(get_update_invoice_use_case),
) -> InvoiceResponse:
    """Edit an invoice. A given item list replaces the existing one."""
    result = await use_case.execute(invoice_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: int,
    store: IInvoiceStore = Depends(get_invoices),
) -> None:
    """Delete an invoice together with its items and payments."""
    if not await store.delete_invoice(invoice_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Invoice not found: {invoice_id}",
        )
