"""API route modules."""

from shuttlestock.api.routes.health import router as health_router
from shuttlestock.api.routes.inventory import router as inventory_router
from shuttlestock.api.routes.pickups import router as pickups_router
from shuttlestock.api.routes.settlement import router as settlement_router

__all__ = [
    "health_router",
    "inventory_router",
    "pickups_router",
    "settlement_router",
]
