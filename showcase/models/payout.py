from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class PayoutStatus(str, Enum):
    REQUESTED = "requested"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"


PAYOUT_STATUSES = [s.value for s in PayoutStatus]


class PayoutRequest(TimestampMixin, db.Model):
    __tablename__ = "payout_requests"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    creator_id = db.Column(db.String(36), db.ForeignKey("creators.id"), nullable=False, index=True)
    amount_cents = db.Column(db.Integer, nullable=True)
    method = db.Column(db.String(20), nullable=False)
    cadence = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PayoutStatus.REQUESTED.value, index=True)
    notes = db.Column(db.Text, nullable=True)

    creator = db.relationship("Creator", back_populates="payout_requests")

    def to_dict(self, include_creator=False):
        data = {
            "id": self.id,
            "creatorId": self.creator_id,
            "amountCents": self.amount_cents,
            "method": self.method,
            "cadence": self.cadence,
            "status": self.status,
            "notes": self.notes,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_creator and self.creator is not None:
            data["creator"] = self.creator.summary()
        return data
