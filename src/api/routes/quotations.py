"""
Quotation endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_create_quotation_use_case,
    get_quotations,
    get_update_quotation_use_case,
)
from src.application.dto.requests import CreateQuotationRequest, UpdateQuotationRequest
from src.application.dto.responses import (
    ErrorResponse,
    QuotationListResponse,
    QuotationResponse,
)
from src.application.presenters import quotation_response
from src.application.use_cases import CreateQuotationUseCase, UpdateQuotationUseCase
from src.core.entities import Region
from src.core.interfaces import IQuotationStore

router = APIRouter(prefix="/api/quotations", tags=["quotations"])


@router.post(
    "",
    response_model=QuotationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Quotation number already used"},
    },
)
async def create_quotation(
    request: CreateQuotationRequest,
    use_case: CreateQuotationUseCase = Depends(get_create_quotation_use_case),
) -> QuotationResponse:
    """Create a quotation."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=QuotationListResponse)
async def list_quotations(
    region: Region | None = Query(default=None, description="Filter by region"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IQuotationStore = Depends(get_quotations),
) -> QuotationListResponse:
    """List quotation headers, newest first."""
    quotations = await store.list_quotations(
        region=region.value if region else None, limit=limit, offset=offset
    )
    return QuotationListResponse(
        quotations=[quotation_response(q) for q in quotations],
        total=len(quotations),
        limit=limit,
        offset=offset,
        has_more=len(quotations) == limit,
    )


@router.get(
    "/{quotation_id}",
    response_model=QuotationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_quotation(
    quotation_id: int,
    store: IQuotationStore = Depends(get_quotations),
) -> QuotationResponse:
    """Get a quotation with its items."""
    quotation = await store.get_quotation(quotation_id)
    if quotation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Quotation not found: {quotation_id}",
        )
    return quotation_response(quotation)


@router.put(
    "/{quotation_id}",
    response_model=QuotationResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_quotation(
    quotation_id: int,
    request: UpdateQuotationRequest,
    use_case: UpdateQuotationUseCase = Depends(get_update_quotation_use_case),
) -> QuotationResponse:
    """Edit a quotation. A given item list replaces the existing one."""
    result = await use_case.execute(quotation_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{quotation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_quotation(
    quotation_id: int,
    store: IQuotationStore = Depends(get_quotations),
) -> None:
    """Delete a quotation and its items."""
    if not await store.delete_quotation(quotation_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Quotation not found: {quotation_id}",
        )
