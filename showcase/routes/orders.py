from flask import Blueprint, jsonify, request

from showcase.security.auth import admin_required
from showcase.services import orders as order_service
from showcase.validation import get_json_body, validate_string

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.route("", methods=["POST"])
def create_order():
    """
    Place a pickup order.

    Returns:
        201 with the order id, status, computed totals and estimated ready time
    """
    order = order_service.create_order(get_json_body(request))
    return jsonify({
        "orderId": order.id,
        "status": order.status,
        "subtotalCents": order.subtotal_cents,
        "taxCents": order.tax_cents,
        "tipCents": order.tip_cents,
        "totalCents": order.total_cents,
        "estimatedReadyAt": order.pickup_at.isoformat(),
    }), 201


@orders_bp.route("", methods=["GET"])
def list_orders():
    """Customer order lookup by phone; the unfiltered list is admin only."""
    phone = validate_string(request.args.get("phone"), "phone", max_length=40)
    orders = order_service.list_orders(
        phone=phone,
        status=request.args.get("status"),
        limit=request.args.get("limit"),
    )
    return jsonify({"orders": [order.to_dict(include_items=False) for order in orders]}), 200


@orders_bp.route("/<order_id>", methods=["GET"])
def get_order(order_id):
    order = order_service.get_order(order_id)
    return jsonify({"order": order.to_dict()}), 200


@orders_bp.route("/<order_id>", methods=["PATCH"])
@admin_required
def update_order(order_id):
    data = get_json_body(request)
    order = order_service.update_order_status(order_id, data.get("status"), data.get("notes"))
    return jsonify({"order": order.to_dict()}), 200
