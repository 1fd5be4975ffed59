"""
Platform revenue share for creator payouts.

The platform fee applies to net receipts: gross less payment processor fees
and any taxes collected on top.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from showcase.models.base import utcnow
from showcase.services.pricing import round_half_up

DEFAULT_PLATFORM_FEE_PERCENT = 15
LAUNCH_PROMO_FEE_PERCENT = 13
MIN_PLATFORM_FEE_PERCENT = 5
MAX_PLATFORM_FEE_PERCENT = 30


@dataclass(frozen=True)
class PayoutBreakdown:
    gross_cents: int
    processor_fees_cents: int
    taxes_cents: int
    net_cents: int
    platform_fee_percent: int
    platform_fee_cents: int
    creator_payout_cents: int

    def to_dict(self):
        return {
            "grossCents": self.gross_cents,
            "processorFeesCents": self.processor_fees_cents,
            "taxesCents": self.taxes_cents,
            "netCents": self.net_cents,
            "platformFeePercent": self.platform_fee_percent,
            "platformFeeCents": self.platform_fee_cents,
            "creatorPayoutCents": self.creator_payout_cents,
        }


def normalize_percent(percent) -> int:
    if percent is None or isinstance(percent, bool):
        return DEFAULT_PLATFORM_FEE_PERCENT
    try:
        rounded = round_half_up(Decimal(str(percent)))
    except ArithmeticError:
        return DEFAULT_PLATFORM_FEE_PERCENT
    return max(MIN_PLATFORM_FEE_PERCENT, min(MAX_PLATFORM_FEE_PERCENT, rounded))


def effective_platform_fee_percent(creator, now=None) -> int:
    """An explicit per-creator percentage wins; otherwise the launch promo, then the default."""
    if creator is None:
        return DEFAULT_PLATFORM_FEE_PERCENT
    if creator.revenue_share_percent is not None:
        return normalize_percent(creator.revenue_share_percent)

    now = now or utcnow()
    if creator.promo_ends_at and now < creator.promo_ends_at:
        return LAUNCH_PROMO_FEE_PERCENT
    return DEFAULT_PLATFORM_FEE_PERCENT


def compute_payout(gross_cents, processor_fees_cents, platform_fee_percent=None, taxes_cents=0) -> PayoutBreakdown:
    percent = normalize_percent(platform_fee_percent)
    net = max(0, gross_cents - processor_fees_cents - (taxes_cents or 0))
    platform_fee = math.floor(net * percent / 100)
    return PayoutBreakdown(
        gross_cents=gross_cents,
        processor_fees_cents=processor_fees_cents,
        taxes_cents=taxes_cents or 0,
        net_cents=net,
        platform_fee_percent=percent,
        platform_fee_cents=platform_fee,
        creator_payout_cents=max(0, net - platform_fee),
    )
