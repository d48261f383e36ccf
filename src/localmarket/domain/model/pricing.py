"""Pricing helpers shared by the cart and the order snapshot.

Rounding happens per line: a line subtotal is rounded once, and the cart
subtotal sums already-rounded line subtotals.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from localmarket.domain.model.value_objects import Money, round2


class PricedLine(Protocol):
    quantity: int

    @property
    def subtotal(self) -> Money: ...


def effective_price(price: Money, sale_price: Money | None) -> Money:
    """The sale price when one is set, otherwise the list price."""
    return sale_price if sale_price is not None else price


def line_subtotal(price: Money, sale_price: Money | None, quantity: int) -> Money:
    unit = effective_price(price, sale_price)
    return Money(round2(unit.amount * quantity), unit.currency)


def cart_totals(lines: Iterable[PricedLine], currency: str = "USD") -> tuple[Money, int]:
    """Return ``(subtotal, item_count)`` for a collection of priced lines."""
    subtotal = Money.zero(currency)
    item_count = 0
    for line in lines:
        subtotal = subtotal + line.subtotal
        item_count += line.quantity
    return subtotal.rounded(), item_count


def percent(part: int, whole: int) -> int:
    """Whole-number percentage rounded half-up; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
