"""API route modules."""

from solarbooks.api.routes.health import router as health_router
from solarbooks.api.routes.inventory import router as inventory_router
from solarbooks.api.routes.invoices import router as invoices_router
from solarbooks.api.routes.payment_schedules import router as payment_schedules_router
from solarbooks.api.routes.quotations import router as quotations_router
from solarbooks.api.routes.tax import router as tax_router

__all__ = [
    "health_router",
    "tax_router",
    "inventory_router",
    "invoices_router",
    "quotations_router",
    "payment_schedules_router",
]
