"""
Liveness and database readiness probes.
"""

import time

import aiosqlite
from fastapi import APIRouter

from src.application.dto.responses import ComponentHealthResponse, HealthResponse
from src.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])
root_router = APIRouter(tags=["health"], include_in_schema=False)

_started_at = time.monotonic()


def _report(database: ComponentHealthResponse | None = None) -> HealthResponse:
    healthy = database is None or database.available
    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=round(time.monotonic() - _started_at, 3),
        database=database,
    )


@root_router.get("/health")
async def root_health() -> dict[str, str]:
    """Minimal probe for container orchestrators."""
    return {"status": "healthy", "version": get_settings().app_version}


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return _report()


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Check that SQLite answers and every region has invoice numbering.

    Unhealthy when the query fails or no sequence rows are seeded.
    """
    from src.infrastructure.storage.sqlite import get_pool

    started = time.perf_counter()
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT region FROM document_sequences ORDER BY region")
            regions = [row["region"] for row in await cursor.fetchall()]
    except aiosqlite.Error as e:
        return _report(ComponentHealthResponse(name="sqlite", available=False, error=str(e)))

    return _report(
        ComponentHealthResponse(
            name=f"sqlite ({', '.join(regions) or 'no sequences'})",
            available=bool(regions),
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )
    )
