"""Unit tests for the fulfillment authorization policy."""

from datetime import datetime, timezone

import pytest

from localmarket.domain.exceptions import AuthorizationError, ValidationError
from localmarket.domain.model.actor import Actor, UserRole
from localmarket.domain.model.fulfillment import OrderFulfillment
from localmarket.domain.service.authorization import ensure_can_modify, ensure_can_view
from tests.builders import CUSTOMER, GROCER, MANAGER, OTHER_GROCER, make_order

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


def _fulfillment(started_by: Actor | None = None) -> OrderFulfillment:
    f = OrderFulfillment.create_from_order("ff-1", make_order(), NOW)
    if started_by is not None:
        f.start(started_by, NOW)
    return f


@pytest.mark.parametrize("role", [UserRole.GUEST, UserRole.CUSTOMER])
def test_non_staff_cannot_view(role):
    with pytest.raises(AuthorizationError, match="cannot view fulfillments"):
        ensure_can_view(Actor(id="u1", name="Someone", role=role))


@pytest.mark.parametrize(
    "role", [UserRole.EMPLOYEE, UserRole.MANAGER, UserRole.ADMIN, UserRole.SUPER_ADMIN]
)
def test_staff_can_view(role):
    ensure_can_view(Actor(id="u1", name="Staff", role=role))


def test_employee_may_pick_up_unstarted_record():
    ensure_can_modify(GROCER, _fulfillment())


def test_employee_may_continue_own_record():
    ensure_can_modify(GROCER, _fulfillment(started_by=GROCER))


def test_employee_blocked_from_colleagues_record():
    with pytest.raises(AuthorizationError, match="being handled by Gail Grocer"):
        ensure_can_modify(OTHER_GROCER, _fulfillment(started_by=GROCER))


def test_manager_may_take_over():
    ensure_can_modify(MANAGER, _fulfillment(started_by=GROCER))


def test_customer_cannot_modify():
    with pytest.raises(AuthorizationError):
        ensure_can_modify(CUSTOMER, _fulfillment())


def test_actor_requires_id():
    with pytest.raises(ValidationError, match="Actor id"):
        Actor(id=" ", name="Nobody")
