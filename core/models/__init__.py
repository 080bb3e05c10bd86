# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - product.py: Product create/update/filter schemas
# - order.py: Order placement request and result schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Product Models
# -----------------------------------------------------------------------------
from .product import (
    ProductCreate,
    ProductFilter,
    ProductSort,
    ProductUpdate,
)

# -----------------------------------------------------------------------------
# Order Models
# -----------------------------------------------------------------------------
from .order import (
    CustomerIn,
    OrderIn,
    OrderItemIn,
    PlaceOrderRequest,
    PlaceOrderResult,
)

__all__ = [
    # Product
    "ProductCreate",
    "ProductFilter",
    "ProductSort",
    "ProductUpdate",
    # Order
    "CustomerIn",
    "OrderIn",
    "OrderItemIn",
    "PlaceOrderRequest",
    "PlaceOrderResult",
]
