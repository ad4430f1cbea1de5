"""API route modules."""

from marginbook.api.routes.calc import router as calc_router
from marginbook.api.routes.health import router as health_router
from marginbook.api.routes.invoices import router as invoices_router
from marginbook.api.routes.receipts import router as receipts_router

__all__ = [
    "health_router",
    "calc_router",
    "receipts_router",
    "invoices_router",
]
