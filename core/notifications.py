# =============================================================================
# core/notifications.py - Order Confirmation Email
# =============================================================================
# Renders the HTML summary sent to the customer (and the shop operator)
# once an order has been stored.
# =============================================================================

from html import escape

from core.models.order import CustomerIn, OrderIn, OrderItemIn


def _money(value: float | int | None) -> str:
    return f"${float(value or 0):,.2f}"


def _text(value: object) -> str:
    if value is None or value == "":
        return "N/A"
    return escape(str(value))


def order_confirmation_subject(order_number: str) -> str:
    return f"Order Confirmation - {order_number}"


def render_order_confirmation(
    order_number: str,
    customer: CustomerIn,
    order: OrderIn,
    items: list[OrderItemIn],
) -> str:
    """
    Render the confirmation email body.

    Includes order number, delivery estimate, subtotal, shipping, total,
    the itemized list, the shipping address and the customer's contact
    details. All user-supplied text is HTML-escaped.
    """
    item_rows = "\n".join(
        "<tr>"
        f"<td>{_text(item.product_name)}</td>"
        f"<td style=\"text-align:center\">{item.quantity}</td>"
        f"<td style=\"text-align:right\">{_money(item.price)}</td>"
        f"<td style=\"text-align:right\">{_money(item.price * item.quantity)}</td>"
        "</tr>"
        for item in items
    )

    return f"""\
<html>
  <body style="font-family: Arial, sans-serif; color: #333;">
    <h2>Thank you for your order!</h2>
    <p>Hi {_text(customer.name or customer.email)},</p>
    <p>We have received your order and it is being processed.</p>

    <h3>Order Summary</h3>
    <p><strong>Order Number:</strong> {_text(order_number)}</p>
    <p><strong>Estimated Delivery:</strong> {_text(order.estimated_delivery)}</p>

    <table style="border-collapse: collapse; width: 100%;" border="1" cellpadding="6">
      <thead>
        <tr><th>Product</th><th>Qty</th><th>Price</th><th>Line Total</th></tr>
      </thead>
      <tbody>
{item_rows}
      </tbody>
    </table>

    <p><strong>Subtotal:</strong> {_money(order.subtotal)}</p>
    <p><strong>Shipping:</strong> {_money(order.shipping_cost)}</p>
    <p><strong>Total:</strong> {_money(order.total_amount)}</p>

    <h3>Shipping Address</h3>
    <p>{_text(customer.address)}</p>

    <h3>Contact</h3>
    <p>Email: {_text(customer.email)}<br>Phone: {_text(customer.phone)}</p>
  </body>
</html>
"""
