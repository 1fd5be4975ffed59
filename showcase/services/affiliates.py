"""Affiliate accounts, referral attribution and performance stats."""

import logging
import secrets
from collections import OrderedDict

from showcase.errors import ApiError, NotFound, ValidationError
from showcase.extensions import db
from showcase.models.affiliate import Affiliate, AffiliatePayoutStatus, Referral, ReferralStatus
from showcase.models.user import User

logger = logging.getLogger(__name__)

# No 0/O or 1/I, which read alike on screen
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 10
DEFAULT_RATE_PERCENT = 10
AFFILIATE_COOKIE_NAME = "aff_ref"
COOKIE_MAX_AGE = 30 * 24 * 60 * 60


def generate_code():
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def _unique_code():
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_code()
        if Affiliate.query.filter_by(code=code).first() is None:
            return code
    raise ApiError("Failed to generate unique code", code="CODE_GENERATION_FAILED")


def get_affiliate(user):
    return (
        Affiliate.query
        .filter_by(user_id=user.id)
        .order_by(Affiliate.created_at.asc())
        .first()
    )


def create_affiliate(user):
    """Return ``(affiliate, created)``; an existing account is returned as is."""
    existing = get_affiliate(user)
    if existing is not None:
        return existing, False

    affiliate = Affiliate(
        user_id=user.id,
        code=_unique_code(),
        rate_percent=DEFAULT_RATE_PERCENT,
        is_active=True,
    )
    db.session.add(affiliate)
    db.session.commit()
    logger.info(f"Affiliate {affiliate.code} created for user {user.id}")
    return affiliate, True


def find_active_by_code(code):
    if not code:
        return None
    affiliate = Affiliate.query.filter_by(code=code.strip().upper()).first()
    if affiliate is None or not affiliate.is_active:
        return None
    return affiliate


def record_referral(user_id, code):
    """
    Attribute ``user_id`` to the affiliate owning ``code``.

    Returns ``(referral, message)``; ``referral`` is None when nothing was
    recorded and ``message`` says why.
    """
    if not user_id:
        raise ValidationError("User ID required", field="userId")
    if not code:
        return None, "No affiliate code found"

    affiliate = find_active_by_code(code)
    if affiliate is None:
        return None, "Invalid affiliate code"
    if affiliate.user_id == user_id:
        return None, "Cannot refer yourself"
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found")

    existing = Referral.query.filter_by(affiliate_id=affiliate.id, referred_user_id=user_id).first()
    if existing is not None:
        return None, "Referral already recorded"

    referral = Referral(
        affiliate_id=affiliate.id,
        referred_user_id=user_id,
        status=ReferralStatus.PENDING.value,
        commission_cents=0,
    )
    db.session.add(referral)
    db.session.commit()
    logger.info(f"Referral {referral.id} recorded for affiliate {affiliate.code}")
    return referral, "Referral recorded successfully"


def affiliate_stats(affiliate):
    referrals = list(affiliate.referrals)
    payouts = list(affiliate.payouts)

    total = len(referrals)
    pending = sum(1 for r in referrals if r.status == ReferralStatus.PENDING.value)
    converted = sum(1 for r in referrals if r.status == ReferralStatus.CONVERTED.value)
    total_commissions = sum(r.commission_cents for r in referrals)
    total_paid = sum(p.amount_cents for p in payouts if p.status == AffiliatePayoutStatus.PAID.value)
    pending_payouts = affiliate.total_earned_cents - total_paid

    by_month = OrderedDict()
    for referral in sorted(referrals, key=lambda r: r.created_at):
        month = referral.created_at.strftime("%Y-%m")
        by_month[month] = by_month.get(month, 0) + 1

    return {
        "affiliate": {
            "code": affiliate.code,
            "ratePercent": affiliate.rate_percent,
            "isActive": affiliate.is_active,
            "createdAt": affiliate.created_at.isoformat(),
        },
        "stats": {
            "totalReferrals": total,
            "pendingReferrals": pending,
            "convertedReferrals": converted,
            "conversionRate": f"{converted / total * 100:.1f}" if total else "0",
            "totalCommissions": total_commissions,
            "totalPaid": total_paid,
            "pendingPayouts": pending_payouts,
            "availableForPayout": max(0, pending_payouts),
        },
        "recentReferrals": [
            {
                "id": r.id,
                "userName": r.referred_user.name if r.referred_user else None,
                "userEmail": r.referred_user.email if r.referred_user else None,
                "status": r.status,
                "commission": r.commission_cents,
                "createdAt": r.created_at.isoformat(),
                "convertedAt": r.converted_at.isoformat() if r.converted_at else None,
            }
            for r in referrals[:10]
        ],
        "referralsByMonth": dict(by_month),
        "recentPayouts": [p.to_dict() for p in payouts[:10]],
    }
