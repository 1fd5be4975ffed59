"""Client intake and B2B lead capture, deposit verification and admin review."""

import logging

from showcase.errors import NotFound, ValidationError
from showcase.extensions import db
from showcase.models.intake import KNOWN_INTAKE_STATUSES, ClientIntake, IntakeStatus
from showcase.services.notifications import NotificationService
from showcase.validation import parse_datetime, validate_email, validate_string

logger = logging.getLogger(__name__)

INTAKE_REQUIRED_FIELDS = (
    ("fullName", "full_name"),
    ("email", "email"),
    ("company", "company"),
    ("projectType", "project_type"),
    ("projectDescription", "project_description"),
    ("goals", "goals"),
    ("targetAudience", "target_audience"),
    ("timeline", "timeline"),
    ("budget", "budget"),
)

INTAKE_OPTIONAL_FIELDS = (
    ("phone", "phone"),
    ("website", "website"),
    ("designPreferences", "design_preferences"),
    ("brandGuidelines", "brand_guidelines"),
    ("contentReady", "content_ready"),
    ("competitors", "competitors"),
    ("inspiration", "inspiration"),
    ("additionalNotes", "additional_notes"),
    ("preferredCallDate", "preferred_call_date"),
    ("preferredCallTime", "preferred_call_time"),
)

LEAD_OPTIONAL_FIELDS = (
    ("phone", "phone"),
    ("website", "website"),
    ("businessType", "business_type"),
    ("revenueModel", "revenue_model"),
    ("paymentProcessorStatus", "payment_processor_status"),
    ("monthlyRevenueEstimate", "monthly_revenue_estimate"),
    ("timeline", "timeline"),
    ("budget", "budget"),
    ("additionalNotes", "additional_notes"),
)


def _string_list(value, field):
    if value in (None, ""):
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of strings", field=field)
    return value


def _optional_string(data, key):
    value = data.get(key)
    if isinstance(value, bool) or isinstance(value, (int, float)):
        value = str(value)
    return validate_string(value, key, required=False)


def _notification_payload(intake):
    return {
        "id": intake.id,
        "fullName": intake.full_name,
        "email": intake.email,
        "phone": intake.phone,
        "company": intake.company,
        "projectType": intake.project_type,
        "projectDescription": intake.project_description or intake.additional_notes,
        "goals": intake.goals,
        "budget": intake.budget,
        "timeline": intake.timeline,
        "launchDate": intake.launch_date.isoformat() if intake.launch_date else None,
        "preferredCallDate": intake.preferred_call_date,
        "preferredCallTime": intake.preferred_call_time,
        "features": list(intake.features or []),
        "uploadedFiles": list(intake.uploaded_files or []),
    }


def create_intake(data):
    values = {}
    missing = [key for key, _ in INTAKE_REQUIRED_FIELDS if not data.get(key)]
    if missing:
        raise ValidationError("Missing required fields", payload={"missing": missing})
    if data.get("termsAccepted") is not True:
        raise ValidationError("Terms must be accepted", field="termsAccepted")

    for key, column in INTAKE_REQUIRED_FIELDS:
        values[column] = validate_string(data.get(key), key)
    values["email"] = validate_email(data.get("email"))
    for key, column in INTAKE_OPTIONAL_FIELDS:
        values[column] = _optional_string(data, key)

    intake = ClientIntake(
        **values,
        features=_string_list(data.get("features"), "features"),
        uploaded_files=_string_list(data.get("uploadedFiles"), "uploadedFiles"),
        launch_date=parse_datetime(data.get("launchDate"), "launchDate"),
        terms_accepted=True,
        status=IntakeStatus.PENDING.value,
    )
    db.session.add(intake)
    db.session.commit()
    logger.info(f"Intake {intake.id} submitted by {intake.company}")

    NotificationService.dispatch(NotificationService.notify_new_intake, _notification_payload(intake))
    return intake


def create_lead(data):
    full_name = data.get("fullName")
    if not isinstance(full_name, str) or not full_name.strip():
        raise ValidationError("Full name is required", field="fullName")
    email = data.get("email")
    if not isinstance(email, str) or "@" not in email:
        raise ValidationError("Valid email is required", field="email")
    company = data.get("company")
    if not isinstance(company, str) or not company.strip():
        raise ValidationError("Company name is required", field="company")
    if data.get("termsAccepted") is not True:
        raise ValidationError("Terms must be accepted", field="termsAccepted")

    lead = ClientIntake(
        full_name=full_name.strip(),
        email=validate_email(email),
        company=company.strip(),
        project_type=_optional_string(data, "projectType") or "b2b-lead",
        referral_source=_optional_string(data, "referralSource") or "unknown",
        commission_interested=data.get("commissionInterested") is True,
        features=[],
        terms_accepted=True,
        status=IntakeStatus.PENDING.value,
        **{column: _optional_string(data, key) for key, column in LEAD_OPTIONAL_FIELDS},
    )
    db.session.add(lead)
    db.session.commit()
    logger.info(f"Lead {lead.id} submitted by {lead.company}")

    NotificationService.dispatch(NotificationService.notify_new_lead, _notification_payload(lead))
    return lead


def get_intake(intake_id):
    intake = db.session.get(ClientIntake, intake_id)
    if intake is None:
        raise NotFound("Intake not found")
    return intake


def list_intakes():
    return ClientIntake.query.order_by(ClientIntake.created_at.desc()).all()


def update_intake_status(intake_id, status):
    """
    Persist ``status`` exactly as given.

    Admin tooling may use labels outside the known workflow, so unknown values
    are logged rather than rejected.
    """
    if not isinstance(status, str) or not status:
        raise ValidationError("Missing status", field="status")

    intake = get_intake(intake_id)
    if status not in KNOWN_INTAKE_STATUSES:
        logger.warning(f"Intake {intake.id} set to unrecognised status {status!r}")
    intake.status = status
    db.session.commit()
    return intake


def mark_deposit_paid(intake_id):
    intake = get_intake(intake_id)
    intake.deposit_paid = True
    intake.status = IntakeStatus.IN_PROGRESS.value
    db.session.commit()
    logger.info(f"Deposit confirmed for intake {intake.id}")
    return intake
