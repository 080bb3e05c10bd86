# =============================================================================
# app/routers/orders.py - Order Placement Endpoint
# =============================================================================

from fastapi import APIRouter

from app.dependencies import OrderServiceDep
from core.models.order import PlaceOrderRequest, PlaceOrderResult

router = APIRouter()


@router.post("/orders", response_model=PlaceOrderResult, status_code=201)
async def place_order(request: PlaceOrderRequest, service: OrderServiceDep):
    """
    Place an order.

    Finds or creates the customer by email, stores the order and its items,
    then emails a confirmation to the customer and the shop.

    A stored order is always answered with 201; `notification_sent` tells
    whether the confirmation email went out.
    """
    return await service.place_order(request)
