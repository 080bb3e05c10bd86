# =============================================================================
# core/services/order_service.py - Order Placement Workflow
# =============================================================================
# Places an order in four sequential steps:
#   1. resolve_customer  - find customer by email, create if missing
#   2. create_order      - insert the order header
#   3. create_items      - insert all line items as one batch
#   4. notify            - email the confirmation (best effort)
#
# Steps 1-3 abort the workflow on failure. If step 3 fails the order row from
# step 2 is deleted again so no order exists without its items. Step 4 never
# fails the request; its outcome is reported as `notification_sent`.
# =============================================================================

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from supabase import Client

from app.exceptions import WorkflowError
from core.models.order import CustomerIn, OrderIn, OrderItemIn, PlaceOrderRequest, PlaceOrderResult
from core.notifications import order_confirmation_subject, render_order_confirmation
from lib.mailer import Mailer, MailerError
from lib.supabase_client import error_message, is_no_rows_error

logger = logging.getLogger(__name__)

CUSTOMERS_TABLE = "customers"
ORDERS_TABLE = "orders"
ORDER_ITEMS_TABLE = "order_items"


def generate_order_number() -> str:
    """Generate an order number in format ORD-YYYYMMDD-XXXXXXXX."""
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"ORD-{today}-{uuid4().hex[:8].upper()}"


class OrderService:
    """
    Service for the checkout workflow.

    Args:
        client: Supabase client for customers, orders and order_items
        mailer: Sends the confirmation email
        operator_email: Shop address copied on every confirmation
    """

    def __init__(self, client: Client, mailer: Mailer, operator_email: str):
        self.client = client
        self.mailer = mailer
        self.operator_email = operator_email

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def resolve_customer(self, customer: CustomerIn) -> Any:
        """
        Return the id of the customer with this email, creating one if needed.

        Raises:
            WorkflowError: If the lookup or insert fails
        """
        try:
            response = (
                self.client.table(CUSTOMERS_TABLE)
                .select("id")
                .eq("email", customer.email)
                .single()
                .execute()
            )
            if response.data:
                logger.debug(f"Reusing customer {response.data['id']} for {customer.email}")
                return response.data["id"]
        except Exception as e:
            if not is_no_rows_error(e):
                raise WorkflowError(
                    f"Failed to look up customer: {error_message(e)}",
                    step="resolve_customer",
                ) from e

        try:
            response = (
                self.client.table(CUSTOMERS_TABLE)
                .insert(customer.to_row())
                .execute()
            )
        except Exception as e:
            raise WorkflowError(
                f"Failed to create customer: {error_message(e)}",
                step="resolve_customer",
            ) from e

        if not response.data:
            raise WorkflowError("Customer insert returned no data", step="resolve_customer")

        customer_id = response.data[0]["id"]
        logger.info(f"Created customer {customer_id} for {customer.email}")
        return customer_id

    def create_order(self, order: OrderIn, customer_id: Any, order_number: str) -> dict[str, Any]:
        """
        Insert the order header.

        Raises:
            WorkflowError: If the insert fails
        """
        try:
            response = (
                self.client.table(ORDERS_TABLE)
                .insert(order.to_row(customer_id, order_number))
                .execute()
            )
        except Exception as e:
            raise WorkflowError(
                f"Failed to create order: {error_message(e)}",
                step="create_order",
            ) from e

        if not response.data:
            raise WorkflowError("Order insert returned no data", step="create_order")

        created = response.data[0]
        logger.info(f"Created order {created['id']} ({order_number}) for customer {customer_id}")
        return created

    def create_items(self, order_id: Any, items: list[OrderItemIn]) -> list[dict[str, Any]]:
        """
        Insert every line item in one batch.

        On failure the order row is removed before the error propagates.

        Raises:
            WorkflowError: If the insert fails
        """
        rows = [item.to_row(order_id) for item in items]

        try:
            response = (
                self.client.table(ORDER_ITEMS_TABLE)
                .insert(rows)
                .execute()
            )
        except Exception as e:
            self._discard_order(order_id)
            raise WorkflowError(
                f"Failed to create order items: {error_message(e)}",
                step="create_items",
                details={"order_id": order_id},
            ) from e

        logger.info(f"Created {len(rows)} item(s) for order {order_id}")
        return response.data or []

    def _discard_order(self, order_id: Any) -> None:
        try:
            self.client.table(ORDERS_TABLE).delete().eq("id", order_id).execute()
            logger.warning(f"Rolled back order {order_id} after item insert failure")
        except Exception as e:
            # Caller still sees the item insert error
            logger.error(f"Failed to roll back order {order_id}: {error_message(e)}")

    async def notify(
        self,
        order_number: str,
        customer: CustomerIn,
        order: OrderIn,
        items: list[OrderItemIn],
    ) -> bool:
        """
        Send the confirmation email to the customer and the operator.

        The order is already stored when this runs, so no failure here may
        reach the caller.

        Returns:
            True if the mail server accepted the message
        """
        recipients = [customer.email, self.operator_email]

        try:
            html = render_order_confirmation(order_number, customer, order, items)
            await self.mailer.send(recipients, order_confirmation_subject(order_number), html)
        except MailerError as e:
            logger.warning(f"Order {order_number!r} stored but confirmation not sent: {e.message}")
            return False
        except Exception:
            logger.exception(f"Order {order_number!r} stored but confirmation failed unexpectedly")
            return False

        return True

    # -------------------------------------------------------------------------
    # Workflow
    # -------------------------------------------------------------------------

    async def place_order(self, request: PlaceOrderRequest) -> PlaceOrderResult:
        """
        Run the full checkout.

        The store steps use the blocking Supabase client, so each one runs in
        a worker thread; they still run strictly one after another.

        Raises:
            WorkflowError: If any persistence step fails
        """
        order_number = request.order.order_number or generate_order_number()

        customer_id = await asyncio.to_thread(self.resolve_customer, request.customer)
        created = await asyncio.to_thread(self.create_order, request.order, customer_id, order_number)
        await asyncio.to_thread(self.create_items, created["id"], request.items)

        sent = await self.notify(order_number, request.customer, request.order, request.items)

        return PlaceOrderResult(
            order_id=created["id"],
            order_number=order_number,
            customer_id=customer_id,
            notification_sent=sent,
        )
