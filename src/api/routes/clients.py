"""
Client endpoints, including the statement of account.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from src.api.dependencies import get_client_ledger_use_case, get_clients
from src.application.dto.requests import CreateClientRequest
from src.application.dto.responses import (
    ClientListResponse,
    ClientResponse,
    ErrorResponse,
    LedgerResponse,
)
from src.application.presenters import client_response
from src.application.use_cases import BuildClientLedgerUseCase
from src.core.entities import Client, Region
from src.core.interfaces import IClientStore

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    request: CreateClientRequest,
    store: IClientStore = Depends(get_clients),
) -> ClientResponse:
    """Register a client in a region."""
    client = await store.create_client(Client(**request.model_dump()))
    return client_response(client)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    region: Region | None = Query(default=None, description="Filter by region"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IClientStore = Depends(get_clients),
) -> ClientListResponse:
    """List clients by name."""
    clients = await store.list_clients(
        region=region.value if region else None, limit=limit, offset=offset
    )
    return ClientListResponse(
        clients=[client_response(c) for c in clients],
        total=len(clients),
    )


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_client(
    client_id: int,
    store: IClientStore = Depends(get_clients),
) -> ClientResponse:
    """Get a client by ID."""
    client = await store.get_client(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client not found: {client_id}",
        )
    return client_response(client)


@router.get(
    "/{client_id}/ledger",
    response_model=None,
    responses={
        200: {"model": LedgerResponse},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_client_ledger(
    client_id: int,
    from_date: date | None = Query(default=None, description="Window start (inclusive)"),
    to_date: date | None = Query(default=None, description="Window end (inclusive)"),
    format: str = Query(default="json", pattern="^(json|csv)$", description="json or csv"),
    use_case: BuildClientLedgerUseCase = Depends(get_client_ledger_use_case),
) -> LedgerResponse | StreamingResponse:
    """
    Statement of account: invoices as debits, payments as credits, with a
    running balance and the closing balance.
    """
    result = await use_case.execute(client_id, from_date, to_date)

    if format == "csv":
        filename = f"ledger_{client_id}_{date.today().isoformat()}.csv"
        return StreamingResponse(
            iter([use_case.to_csv(result)]),
            media_type="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
            },
        )

    return use_case.to_response(result)
