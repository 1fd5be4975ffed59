from flask import Blueprint, jsonify, request

from showcase.security.auth import admin_required
from showcase.services import intake as intake_service
from showcase.services import orders as order_service
from showcase.services import payouts as payout_service
from showcase.validation import get_json_body

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.route("/intakes", methods=["GET"])
@admin_required
def list_intakes():
    intakes = intake_service.list_intakes()
    return jsonify({"intakes": [intake.summary() for intake in intakes]}), 200


@admin_bp.route("/intakes/<intake_id>", methods=["GET"])
@admin_required
def get_intake(intake_id):
    intake = intake_service.get_intake(intake_id)
    return jsonify(intake.to_dict()), 200


@admin_bp.route("/intakes/<intake_id>", methods=["PATCH"])
@admin_required
def update_intake(intake_id):
    """
    Update an intake's status.

    The value is stored exactly as sent; unrecognised statuses are only logged.
    """
    data = get_json_body(request)
    intake = intake_service.update_intake_status(intake_id, data.get("status"))
    return jsonify(intake.to_dict()), 200


@admin_bp.route("/orders", methods=["GET"])
@admin_required
def list_orders():
    orders = order_service.list_orders(
        phone=request.args.get("phone"),
        status=request.args.get("status"),
        limit=request.args.get("limit"),
    )
    return jsonify({"orders": [order.to_dict() for order in orders]}), 200


@admin_bp.route("/payouts/requests", methods=["GET"])
@admin_required
def list_payout_requests():
    rows = payout_service.list_requests(status=request.args.get("status") or None)
    return jsonify({"requests": [row.to_dict(include_creator=True) for row in rows]}), 200


@admin_bp.route("/payouts/requests/<request_id>", methods=["PATCH"])
@admin_required
def update_payout_request(request_id):
    row = payout_service.update_request(request_id, get_json_body(request))
    return jsonify({"ok": True, "request": row.to_dict()}), 200
