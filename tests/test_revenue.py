from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from showcase.services.revenue import (
    DEFAULT_PLATFORM_FEE_PERCENT,
    LAUNCH_PROMO_FEE_PERCENT,
    compute_payout,
    effective_platform_fee_percent,
    normalize_percent,
)

NOW = datetime(2025, 6, 1, 12, 0, 0)


def make_creator(percent=None, promo_ends_at=None):
    return SimpleNamespace(revenue_share_percent=percent, promo_ends_at=promo_ends_at)


class TestNormalizePercent:
    @pytest.mark.parametrize("value,expected", [
        (None, 15),
        (2, 5),
        (45, 30),
        (12.5, 13),
        (12.4, 12),
        ("20", 20),
        ("abc", 15),
        (True, 15),
    ])
    def test_clamped_and_rounded(self, value, expected):
        assert normalize_percent(value) == expected


class TestEffectivePercent:
    def test_no_creator_uses_default(self):
        assert effective_platform_fee_percent(None, NOW) == DEFAULT_PLATFORM_FEE_PERCENT

    def test_active_promo(self):
        creator = make_creator(promo_ends_at=NOW + timedelta(days=10))
        assert effective_platform_fee_percent(creator, NOW) == LAUNCH_PROMO_FEE_PERCENT

    def test_expired_promo(self):
        creator = make_creator(promo_ends_at=NOW - timedelta(seconds=1))
        assert effective_platform_fee_percent(creator, NOW) == DEFAULT_PLATFORM_FEE_PERCENT

    def test_explicit_percent_wins_over_promo(self):
        creator = make_creator(percent=20, promo_ends_at=NOW + timedelta(days=10))
        assert effective_platform_fee_percent(creator, NOW) == 20

    def test_explicit_percent_is_clamped(self):
        assert effective_platform_fee_percent(make_creator(percent=50), NOW) == 30


class TestComputePayout:
    def test_default_split(self):
        breakdown = compute_payout(10000, 320)

        assert breakdown.net_cents == 9680
        assert breakdown.platform_fee_percent == 15
        assert breakdown.platform_fee_cents == 1452
        assert breakdown.creator_payout_cents == 8228

    def test_fee_is_floored(self):
        breakdown = compute_payout(999, 0, 13)

        assert breakdown.platform_fee_cents == 129
        assert breakdown.creator_payout_cents == 870

    def test_taxes_reduce_net(self):
        breakdown = compute_payout(10000, 0, 10, taxes_cents=1000)

        assert breakdown.net_cents == 9000
        assert breakdown.platform_fee_cents == 900

    def test_fees_above_gross_never_go_negative(self):
        breakdown = compute_payout(100, 500)

        assert breakdown.net_cents == 0
        assert breakdown.creator_payout_cents == 0

    def test_to_dict_keys(self):
        data = compute_payout(1000, 0, 15).to_dict()
        assert set(data) == {
            "grossCents", "processorFeesCents", "taxesCents", "netCents",
            "platformFeePercent", "platformFeeCents", "creatorPayoutCents",
        }
