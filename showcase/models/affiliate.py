from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class ReferralStatus(str, Enum):
    PENDING = "PENDING"
    CONVERTED = "CONVERTED"


class AffiliatePayoutStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


class Affiliate(TimestampMixin, db.Model):
    __tablename__ = "affiliates"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    code = db.Column(db.String(16), unique=True, nullable=False, index=True)
    rate_percent = db.Column(db.Integer, nullable=False, default=10)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    total_earned_cents = db.Column(db.Integer, nullable=False, default=0)

    user = db.relationship("User", back_populates="affiliates")
    referrals = db.relationship(
        "Referral", back_populates="affiliate", order_by="Referral.created_at.desc()", lazy=True
    )
    payouts = db.relationship(
        "AffiliatePayout", back_populates="affiliate", order_by="AffiliatePayout.created_at.desc()", lazy=True
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "code": self.code,
            "ratePercent": self.rate_percent,
            "isActive": self.is_active,
            "totalEarnedCents": self.total_earned_cents,
            "createdAt": isoformat(self.created_at),
        }


class Referral(TimestampMixin, db.Model):
    __tablename__ = "referrals"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    affiliate_id = db.Column(db.String(36), db.ForeignKey("affiliates.id"), nullable=False, index=True)
    referred_user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=ReferralStatus.PENDING.value)
    commission_cents = db.Column(db.Integer, nullable=False, default=0)
    converted_at = db.Column(db.DateTime, nullable=True)

    affiliate = db.relationship("Affiliate", back_populates="referrals")
    referred_user = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "affiliateId": self.affiliate_id,
            "referredUserId": self.referred_user_id,
            "referredUser": self.referred_user.to_dict() if self.referred_user else None,
            "status": self.status,
            "commissionCents": self.commission_cents,
            "convertedAt": isoformat(self.converted_at),
            "createdAt": isoformat(self.created_at),
        }


class AffiliatePayout(TimestampMixin, db.Model):
    __tablename__ = "affiliate_payouts"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    affiliate_id = db.Column(db.String(36), db.ForeignKey("affiliates.id"), nullable=False, index=True)
    amount_cents = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=AffiliatePayoutStatus.PENDING.value)
    paid_at = db.Column(db.DateTime, nullable=True)

    affiliate = db.relationship("Affiliate", back_populates="payouts")

    def to_dict(self):
        return {
            "id": self.id,
            "amountCents": self.amount_cents,
            "status": self.status,
            "paidAt": isoformat(self.paid_at),
            "createdAt": isoformat(self.created_at),
        }
