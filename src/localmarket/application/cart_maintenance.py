"""Application service: saved-cart monitoring and cleanup (admin / cron)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import CartDTO
from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.value_objects import Money, round2
from localmarket.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartStatsDTO:
    total_carts: int
    total_value: str
    average_value: str
    total_items: int


class CartMaintenanceHandler:

    def __init__(self, cart_repo: CartRepository, clock: Clock = utc_now) -> None:
        self._cart_repo = cart_repo
        self._clock = clock

    def abandoned_carts(self, days_inactive: int = 7) -> list[CartDTO]:
        """Carts untouched for *days_inactive* days, most recent first."""
        carts = self._cart_repo.list_inactive_since(self._cutoff(days_inactive))
        return [CartDTO.from_cart(cart) for cart in carts]

    def stats(self) -> CartStatsDTO:
        carts = self._cart_repo.list_all()
        total_value = Money.zero()
        total_items = 0
        for cart in carts:
            total_value = total_value + cart.subtotal
            total_items += cart.item_count

        average = (
            round2(total_value.amount / len(carts)) if carts else Decimal("0.00")
        )
        return CartStatsDTO(
            total_carts=len(carts),
            total_value=str(total_value.rounded()),
            average_value=str(Money(average)),
            total_items=total_items,
        )

    def clear_expired(self, days_inactive: int = 90) -> int:
        """Delete carts untouched for *days_inactive* days; return how many."""
        carts = self._cart_repo.list_inactive_since(self._cutoff(days_inactive))
        for cart in carts:
            self._cart_repo.delete(cart.owner_id)
        logger.info(
            "Expired carts cleared",
            days_inactive=days_inactive,
            deleted_count=len(carts),
        )
        return len(carts)

    def _cutoff(self, days_inactive: int):
        if days_inactive < 0:
            raise ValidationError("days_inactive cannot be negative")
        return self._clock() - timedelta(days=days_inactive)
