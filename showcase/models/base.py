import uuid
from datetime import datetime, timezone

from showcase.extensions import db


def utcnow():
    """Naive UTC timestamp, matching what the columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id():
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
