# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .product_service import ProductService
from .order_service import OrderService

__all__ = [
    "ProductService",
    "OrderService",
]
