"""
Order pricing.

All money is integer cents. Tax is rounded half-up to the nearest cent, so 8.5%
of 100 cents is 9 cents of tax.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from showcase.errors import ValidationError

TAX_RATE = 0.085


@dataclass(frozen=True)
class OrderTotals:
    subtotal_cents: int
    tax_cents: int
    tip_cents: int
    total_cents: int

    def to_dict(self):
        return {
            "subtotalCents": self.subtotal_cents,
            "taxCents": self.tax_cents,
            "tipCents": self.tip_cents,
            "totalCents": self.total_cents,
        }


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_tax(subtotal_cents: int, tax_rate=TAX_RATE) -> int:
    # str() keeps 0.085 exact; Decimal(0.085) would carry the binary error
    return round_half_up(Decimal(subtotal_cents) * Decimal(str(tax_rate)))


def line_subtotal(item: dict) -> int:
    """unit price times quantity, plus each customization's price times quantity."""
    qty = item.get("qty", 1)
    unit_cents = item.get("unit_cents", 0)
    if qty < 0 or unit_cents < 0:
        raise ValidationError("Item price and quantity must be non-negative", field="items")

    total = unit_cents * qty
    for custom in item.get("customizations") or []:
        price = custom.get("price_cents", 0)
        if price < 0:
            raise ValidationError("Customization price must be non-negative", field="items")
        total += price * qty
    return total


def compute_order_totals(items, tip_cents=0, tax_rate=TAX_RATE) -> OrderTotals:
    if tip_cents < 0:
        raise ValidationError("Tip must be non-negative", field="tipCents")

    subtotal = sum(line_subtotal(item) for item in items)
    tax = compute_tax(subtotal, tax_rate)
    return OrderTotals(
        subtotal_cents=subtotal,
        tax_cents=tax,
        tip_cents=tip_cents,
        total_cents=subtotal + tax + tip_cents,
    )
