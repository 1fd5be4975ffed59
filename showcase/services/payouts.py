"""Creator payout preferences and payout requests."""

import logging

from showcase.errors import NotFound, ValidationError
from showcase.extensions import db
from showcase.models.creator import PAYOUT_CADENCES, PAYOUT_METHODS, Creator
from showcase.models.payout import PAYOUT_STATUSES, PayoutRequest, PayoutStatus
from showcase.models.user import UserRole
from showcase.services import revenue
from showcase.validation import validate_choice, validate_int, validate_string

logger = logging.getLogger(__name__)


def get_creator(user):
    return Creator.query.filter_by(user_id=user.id).first()


def require_creator(user):
    creator = get_creator(user)
    if creator is None:
        raise NotFound("Creator profile not found")
    return creator


def get_or_create_creator(user):
    creator = get_creator(user)
    if creator is None:
        creator = Creator(user_id=user.id, display_name=user.name or user.email.split("@")[0])
        db.session.add(creator)
        if user.role == UserRole.USER.value:
            user.role = UserRole.CREATOR.value
        logger.info(f"Creator profile created for user {user.id}")
    return creator


def update_preferences(user, data):
    cadence = validate_choice(data.get("payoutCadence"), "payoutCadence", PAYOUT_CADENCES, required=False)
    method = validate_choice(data.get("payoutMethod"), "payoutMethod", PAYOUT_METHODS, required=False)

    creator = require_creator(user)
    if cadence:
        creator.payout_cadence = cadence
    if method:
        creator.payout_method = method
    db.session.commit()
    return creator


def create_request(user, data):
    creator = require_creator(user)
    amount_cents = validate_int(data.get("amountCents"), "amountCents", minimum=0, required=False)
    method = validate_choice(data.get("method"), "method", PAYOUT_METHODS, required=False) \
        or creator.payout_method
    cadence = validate_choice(data.get("cadence"), "cadence", PAYOUT_CADENCES, required=False) \
        or creator.payout_cadence

    request_row = PayoutRequest(
        creator_id=creator.id,
        amount_cents=amount_cents,
        method=method,
        cadence=cadence,
        status=PayoutStatus.REQUESTED.value,
        notes=validate_string(data.get("notes"), "notes", required=False),
    )
    db.session.add(request_row)
    db.session.commit()
    logger.info(f"Payout request {request_row.id} created for creator {creator.id}")
    return request_row


def preview(user, gross_cents, fees_cents, taxes_cents=0):
    creator = get_creator(user)
    percent = revenue.effective_platform_fee_percent(creator)
    return revenue.compute_payout(gross_cents, fees_cents, percent, taxes_cents)


def list_requests(status=None):
    query = PayoutRequest.query
    if status:
        query = query.filter(PayoutRequest.status == status)
    return query.order_by(PayoutRequest.created_at.desc()).all()


def update_request(request_id, data):
    """
    Apply an admin decision. The status must be a known payout status, but
    any status may follow any other.
    """
    request_row = db.session.get(PayoutRequest, request_id)
    if request_row is None:
        raise NotFound("Payout request not found")

    status = data.get("status")
    if status is not None:
        request_row.status = validate_choice(status, "status", PAYOUT_STATUSES)
    if "notes" in data:
        if data["notes"] is not None and not isinstance(data["notes"], str):
            raise ValidationError("notes must be a string", field="notes")
        request_row.notes = validate_string(data["notes"], "notes", required=False)

    db.session.commit()
    logger.info(f"Payout request {request_row.id} is now {request_row.status}")
    return request_row
