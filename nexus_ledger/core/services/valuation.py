"""
Weighted-average cost valuation.

Only receipts revalue a position. Issues, consumption and count adjustments
take stock out (or in) at the current average, so the cost layer is never
revalued on disposal.
"""

from decimal import ROUND_HALF_EVEN, Decimal

DEFAULT_PLACES = 2

# Average costs carry more precision than money so repeated blending does not drift
COST_PLACES = 6


def quantize_money(value: Decimal | int | float | str, places: int = DEFAULT_PLACES) -> Decimal:
    """Round a monetary value with banker's rounding to a fixed precision."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_EVEN)


def compute_wac(
    current_qty: int,
    current_avg_cost: Decimal,
    incoming_qty: int,
    incoming_unit_cost: Decimal,
    places: int = COST_PLACES,
) -> Decimal:
    """
    Blend an incoming receipt into the current average cost.

    new = (q * c + q' * c') / (q + q'), or 0 when q + q' is 0.

    Example:
        100 @ 10.00 then 50 @ 16.00 -> (1000 + 800) / 150 = 12.000000
    """
    total_qty = current_qty + incoming_qty
    if total_qty == 0:
        return quantize_money(Decimal("0"), places)

    total_value = Decimal(current_qty) * Decimal(current_avg_cost) + Decimal(
        incoming_qty
    ) * Decimal(incoming_unit_cost)
    return quantize_money(total_value / Decimal(total_qty), places)


def extend(quantity: int, unit_cost: Decimal, places: int = DEFAULT_PLACES) -> Decimal:
    """Line total for a quantity at a unit cost."""
    return quantize_money(Decimal(quantity) * Decimal(unit_cost), places)
