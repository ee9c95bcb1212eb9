"""
pricing.py — Discount Code Pricing

Applies a discount code to a single price. The code table and the minimum
purchase amount are fixed module constants.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from types import MappingProxyType

from .models import DiscountResult

DISCOUNT_CODES = MappingProxyType({
    "SAVE10": 10,
    "SAVE20": 20,
    "SAVE50": 50,
    "FIRSTBUY": 15,
})

# Discounts only apply to prices strictly above this amount
MINIMUM_PURCHASE_AMOUNT = 50

_CENTS = Decimal("0.01")


def _to_decimal(value) -> Decimal:
    return Decimal(str(float(value)))


def calculate_final_price(original_price, discount_code: str = "") -> DiscountResult:
    """
    Calculates the final price after applying a discount code.

    Codes are matched case-insensitively after trimming. Unknown codes, and any
    code on a price of MINIMUM_PURCHASE_AMOUNT or less, give no discount.

    Args:
        original_price (int | float): The original price. Must be a finite number >= 0.
        discount_code (str): The discount code to apply. Optional.

    Returns:
        DiscountResult: finalPrice computed in Decimal and rounded half-up to 2 decimals, never below 0,
        and the percentage that was applied.

    Raises:
        TypeError: If the price is not a finite number.
        ValueError: If the price is negative.
    """
    if (isinstance(original_price, bool) or not isinstance(original_price, Real)
            or not math.isfinite(original_price)):
        raise TypeError("Price must be a number")

    if original_price < 0:
        raise ValueError("Price must be positive")

    normalized_code = discount_code.strip().upper() if isinstance(discount_code, str) else ""
    discount_percentage = DISCOUNT_CODES.get(normalized_code, 0)

    applicable_discount = discount_percentage if original_price > MINIMUM_PURCHASE_AMOUNT else 0

    price = _to_decimal(original_price)
    discount_amount = price * applicable_discount / 100
    final_price = max(Decimal(0), price - discount_amount)

    return DiscountResult(
        finalPrice=float(final_price.quantize(_CENTS, rounding=ROUND_HALF_UP)),
        discountApplied=applicable_discount,
        discountPercentage=applicable_discount,
    )
