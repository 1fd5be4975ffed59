from flask import Blueprint, jsonify, request

from showcase.services import checkout as checkout_service
from showcase.validation import get_json_body, validate_string

checkout_bp = Blueprint("checkout", __name__, url_prefix="/api/checkout")


@checkout_bp.route("", methods=["POST"])
def create_checkout():
    """
    Start a Stripe Checkout session.

    ``type=deposit`` charges the intake deposit for its budget bucket; an
    ``orderId`` charges a stored order at the prices recorded on it.
    """
    data = get_json_body(request)

    if data.get("type") == "deposit":
        intake_id = validate_string(data.get("intakeId"), "intakeId", max_length=36)
        budget = validate_string(data.get("budget"), "budget", max_length=50)
        session = checkout_service.create_deposit_checkout(intake_id, budget)
    else:
        order_id = validate_string(data.get("orderId"), "orderId", max_length=36)
        session = checkout_service.create_order_checkout(order_id)

    return jsonify({"url": session["url"], "sessionId": session["id"]}), 200
