"""Final-price preview for service forms. The backend stays authoritative."""

from __future__ import annotations

from typing import Any, Literal

DiscountType = Literal["amount", "percentage"]
DISCOUNT_TYPES = ("amount", "percentage")


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def discount_amount(normal_price: Any, discount_type: str, discount: Any) -> float:
    price = _as_number(normal_price)
    value = _as_number(discount)
    if discount_type == "percentage":
        return price * value / 100
    return value


def compute_final_price(
    normal_price: Any,
    is_discount: bool,
    discount_type: str,
    discount: Any,
) -> float:
    """Return ``max(0, normal_price - discount_amount)``.

    The discount is ignored unless ``is_discount`` is set and positive.
    """
    price = _as_number(normal_price)
    if not is_discount or _as_number(discount) <= 0:
        return max(0.0, price)
    return max(0.0, price - discount_amount(price, discount_type, discount))


__all__ = ["DISCOUNT_TYPES", "DiscountType", "compute_final_price", "discount_amount"]
