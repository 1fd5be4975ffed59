from flask import Blueprint, jsonify, request

from showcase.errors import ValidationError
from showcase.extensions import limiter
from showcase.security.rate_limit import intake_limit
from showcase.services import checkout as checkout_service
from showcase.services import intake as intake_service
from showcase.validation import get_json_body

intake_bp = Blueprint("intake", __name__, url_prefix="/api")


@intake_bp.route("/intake", methods=["POST"])
@limiter.limit(intake_limit)
def submit_intake():
    """
    Accept a full project intake form.

    Notifications to the team and the client are sent in the background.
    """
    intake = intake_service.create_intake(get_json_body(request))
    return jsonify({
        "success": True,
        "intakeId": intake.id,
        "message": "Intake form submitted successfully",
    }), 201


@intake_bp.route("/lead-intake", methods=["POST"])
@limiter.limit(intake_limit)
def submit_lead():
    lead = intake_service.create_lead(get_json_body(request))
    return jsonify({
        "success": True,
        "leadId": lead.id,
        "message": "Lead inquiry submitted successfully",
    }), 201


@intake_bp.route("/intake/verify", methods=["POST"])
def verify_deposit():
    """Confirm a paid deposit checkout and move its intake into progress."""
    session_id = get_json_body(request).get("sessionId")
    if not session_id:
        raise ValidationError("Session ID required", field="sessionId")

    intake = checkout_service.verify_deposit(session_id)
    return jsonify({
        "success": True,
        "intakeId": intake.id,
        "message": "Payment verified and intake updated",
    }), 200
