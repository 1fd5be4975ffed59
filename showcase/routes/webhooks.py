import logging

from flask import Blueprint, jsonify, request

from showcase.extensions import db
from showcase.services import stripe_events
from showcase.services.checkout import stripe_field
from showcase.services.notifications import NotificationService

logger = logging.getLogger(__name__)

webhooks_bp = Blueprint("webhooks", __name__, url_prefix="/api/webhooks")


@webhooks_bp.route("/stripe", methods=["POST"])
def stripe_webhook():
    """
    Receive Stripe events.

    Signature failures are 400. A failure while handling a verified event
    alerts the kitchen webhook and the admin inbox, then returns 500 so that
    Stripe retries the delivery.
    """
    payload = request.get_data()
    signature = request.headers.get("Stripe-Signature")
    event = stripe_events.construct_event(payload, signature)

    try:
        result = stripe_events.handle_event(event)
    except Exception as e:
        db.session.rollback()
        event_type = stripe_field(event, "type", "unknown")
        logger.exception(f"Error processing Stripe webhook {event_type}")
        NotificationService.dispatch(NotificationService.notify_webhook_failure, str(e), event_type)
        return jsonify({"error": "Processing error", "code": "WEBHOOK_PROCESSING_FAILED"}), 500

    return jsonify({"received": True, **result}), 200
