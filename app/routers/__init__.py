# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - products.py: Product CRUD, filter and search endpoints
# - orders.py: Order placement endpoint
#
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import orders
from . import products

__all__ = [
    "health",
    "orders",
    "products",
]
