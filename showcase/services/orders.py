"""Restaurant order placement, lookup and status updates."""

import logging
import re
from datetime import timedelta

from flask import current_app

from showcase.errors import NotFound, ValidationError
from showcase.extensions import db
from showcase.models.base import utcnow
from showcase.models.order import ORDER_STATUSES, Order, OrderItem, OrderStatus, OrderStatusHistory, PaymentStatus
from showcase.services.menu import apply_menu_prices
from showcase.services.notifications import NotificationService
from showcase.services.pricing import compute_order_totals
from showcase.validation import parse_datetime, validate_email, validate_int, validate_string

logger = logging.getLogger(__name__)

DEFAULT_PREP_MINUTES = 30
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200


def _parse_items(raw_items):
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("Cart cannot be empty", field="items")

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise ValidationError("Invalid cart item", field="items")
        customizations = []
        for custom in raw.get("customizations") or []:
            if not isinstance(custom, dict):
                raise ValidationError("Invalid customization", field="items")
            customizations.append({
                "name": str(custom.get("name") or ""),
                "price_cents": validate_int(custom.get("priceCents"), "priceCents", minimum=0, required=False, default=0),
            })
        items.append({
            "name": validate_string(raw.get("name"), "name", max_length=200),
            "sku": validate_string(raw.get("sku"), "sku", max_length=100, required=False),
            "qty": validate_int(raw.get("qty"), "qty", minimum=1, required=False, default=1),
            "unit_cents": validate_int(raw.get("unitCents"), "unitCents", minimum=0, required=False, default=0),
            "customizations": customizations,
            "special_request": validate_string(raw.get("specialRequest"), "specialRequest", required=False),
        })
    return items


def create_order(data):
    customer_name = data.get("customerName")
    customer_phone = data.get("customerPhone")
    if not isinstance(customer_name, str) or not customer_name.strip() \
            or not isinstance(customer_phone, str) or not customer_phone.strip():
        raise ValidationError("Name and phone required")

    items = apply_menu_prices(_parse_items(data.get("items")))
    tip_cents = validate_int(data.get("tipCents"), "tipCents", minimum=0, required=False, default=0)
    customer_email = data.get("customerEmail")
    if customer_email:
        customer_email = validate_email(customer_email, field="customerEmail")

    totals = compute_order_totals(
        items,
        tip_cents=tip_cents,
        tax_rate=current_app.config.get("ORDER_TAX_RATE"),
    )
    pickup_at = parse_datetime(data.get("pickupAt"), "pickupAt") \
        or utcnow() + timedelta(minutes=DEFAULT_PREP_MINUTES)

    order = Order(
        customer_name=customer_name.strip(),
        customer_email=customer_email or None,
        customer_phone=customer_phone.strip(),
        subtotal_cents=totals.subtotal_cents,
        tax_cents=totals.tax_cents,
        tip_cents=totals.tip_cents,
        total_cents=totals.total_cents,
        status=OrderStatus.PENDING.value,
        payment_status=PaymentStatus.UNPAID.value,
        pickup_at=pickup_at,
        special_instructions=validate_string(
            data.get("specialInstructions"), "specialInstructions", required=False
        ),
    )
    for item in items:
        order.items.append(OrderItem(
            name=item["name"],
            sku=item["sku"],
            qty=item["qty"],
            unit_cents=item["unit_cents"],
            customizations=[
                {"name": c["name"], "priceCents": c["price_cents"]} for c in item["customizations"]
            ],
            special_request=item["special_request"],
        ))
    order.history.append(OrderStatusHistory(status=OrderStatus.PENDING.value, notes="Order placed online"))

    db.session.add(order)
    db.session.commit()
    logger.info(f"Order {order.id} placed: {len(items)} items, total {order.total_cents} cents")

    NotificationService.dispatch(NotificationService.notify_new_order, {
        "id": order.id,
        "customerName": order.customer_name,
        "customerPhone": order.customer_phone,
        "totalCents": order.total_cents,
        "itemCount": len(items),
        "pickupAt": pickup_at.isoformat(),
    })
    return order


def list_orders(phone=None, status=None, limit=None):
    limit = validate_int(limit, "limit", minimum=1, required=False, default=DEFAULT_LIST_LIMIT)
    limit = min(limit, MAX_LIST_LIMIT)

    query = Order.query
    if phone:
        digits = re.sub(r"\D", "", phone)
        if not digits:
            return []
        query = query.filter(Order.customer_phone.contains(digits))
    if status:
        query = query.filter(Order.status == status)
    return query.order_by(Order.created_at.desc()).limit(limit).all()


def get_order(order_id):
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFound("Order not found")
    return order


def update_order_status(order_id, status, notes=None):
    """
    Set an order's status and append a history row.

    Any known status may follow any other; there is no transition graph.
    """
    if status not in ORDER_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(ORDER_STATUSES)}", field="status")
    notes = validate_string(notes, "notes", required=False)

    order = get_order(order_id)
    previous = order.status
    order.status = status
    order.history.append(OrderStatusHistory(status=status, notes=notes))
    db.session.commit()

    logger.info(f"Order {order.id} status {previous} -> {status}")
    return order


def mark_order_paid(order_id, session_id=None):
    order = db.session.get(Order, order_id)
    if order is None:
        logger.warning(f"Paid checkout references unknown order {order_id}")
        return None
    order.payment_status = PaymentStatus.PAID.value
    if session_id:
        order.stripe_session_id = session_id
    return order
