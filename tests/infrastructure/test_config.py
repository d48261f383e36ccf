"""Tests for environment-driven settings."""

from datetime import timedelta
from pathlib import Path

import pytest

from localmarket.infrastructure.config import load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.data_dir.name == "data"
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.cart_ttl == timedelta(days=30)
    assert settings.outbox_max_attempts == 3


def test_overrides():
    settings = load_settings({
        "LOCALMARKET_DATA_DIR": "/srv/market",
        "LOCALMARKET_LOG_LEVEL": "debug",
        "LOCALMARKET_LOG_JSON": "yes",
        "LOCALMARKET_CART_TTL_DAYS": "7",
        "LOCALMARKET_OUTBOX_MAX_ATTEMPTS": "5",
    })
    assert settings.data_dir == Path("/srv/market")
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.cart_ttl == timedelta(days=7)
    assert settings.outbox_max_attempts == 5


def test_zero_ttl_disables_expiry():
    assert load_settings({"LOCALMARKET_CART_TTL_DAYS": "0"}).cart_ttl is None


def test_attempts_floor_at_one():
    assert load_settings({"LOCALMARKET_OUTBOX_MAX_ATTEMPTS": "0"}).outbox_max_attempts == 1


def test_bad_integer():
    with pytest.raises(ValueError, match="LOCALMARKET_CART_TTL_DAYS"):
        load_settings({"LOCALMARKET_CART_TTL_DAYS": "soon"})
