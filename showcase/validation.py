# showcase/validation.py
"""Input validation helpers for API routes."""

import re
from datetime import datetime, timezone

from showcase.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def get_json_body(request):
    """Parsed JSON object body, or an empty dict for a missing/invalid body."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def validate_email(value, field="email"):
    if not isinstance(value, str):
        raise ValidationError("Email must be a string", field=field)

    trimmed = value.strip().lower()
    if not EMAIL_RE.match(trimmed):
        raise ValidationError("Invalid email format", field=field)
    if len(trimmed) > 255:
        raise ValidationError("Email too long", field=field)
    return trimmed


def validate_string(value, field, min_length=0, max_length=10000, required=True):
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)

    trimmed = value.strip()
    if required and not trimmed:
        raise ValidationError(f"{field} is required", field=field)
    if len(trimmed) < min_length:
        raise ValidationError(f"{field} must be at least {min_length} characters", field=field)
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return trimmed or None


def validate_int(value, field, minimum=None, maximum=None, required=True, default=None):
    """Integer (cents, quantities). Booleans and fractional values are rejected."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return default

    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer", field=field)

    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be an integer", field=field)
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field} must be an integer", field=field)
        value = int(value)
    elif not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)

    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", field=field)
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be at most {maximum}", field=field)
    return value


def validate_choice(value, field, choices, required=True):
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if value not in choices:
        raise ValidationError(f"Invalid {field}", field=field)
    return value


def parse_datetime(value, field):
    """ISO-8601 timestamp (a trailing 'Z' is accepted) to a naive UTC datetime."""
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 string", field=field)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 string", field=field)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
