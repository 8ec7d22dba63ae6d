"""API route modules."""

from src.api.routes.clients import router as clients_router
from src.api.routes.health import router as health_router
from src.api.routes.invoices import router as invoices_router
from src.api.routes.payments import router as payments_router
from src.api.routes.quotations import router as quotations_router
from src.api.routes.sequences import router as sequences_router

__all__ = [
    "health_router",
    "clients_router",
    "invoices_router",
    "quotations_router",
    "payments_router",
    "sequences_router",
]
