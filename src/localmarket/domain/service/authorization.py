"""Domain service: who may touch a fulfillment record.

Customers never see the picking checklist. Employees may work on a
fulfillment nobody has started yet, or one they started themselves.
Managers and admins may work on any fulfillment.
"""

from __future__ import annotations

from localmarket.domain.exceptions import AuthorizationError
from localmarket.domain.model.actor import Actor
from localmarket.domain.model.fulfillment import OrderFulfillment


def ensure_can_view(actor: Actor) -> None:
    if not actor.is_staff:
        raise AuthorizationError(
            f"{actor.name or actor.id} ({actor.role.value}) cannot view fulfillments"
        )


def ensure_can_modify(actor: Actor, fulfillment: OrderFulfillment) -> None:
    ensure_can_view(actor)
    if actor.is_supervisor:
        return
    if fulfillment.started_by is None or fulfillment.started_by == actor.id:
        return
    raise AuthorizationError(
        f"Fulfillment for order {fulfillment.order_number} is being handled by "
        f"{fulfillment.started_by_name or fulfillment.started_by}"
    )
