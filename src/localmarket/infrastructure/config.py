"""Runtime settings, read from the environment.

Every value has a default suitable for local development, so the CLI
works from a fresh checkout without any variables set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"
    log_json: bool = False
    cart_ttl_days: int = 30
    outbox_max_attempts: int = 3

    @property
    def cart_ttl(self) -> timedelta | None:
        return timedelta(days=self.cart_ttl_days) if self.cart_ttl_days > 0 else None


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        data_dir=Path(env.get("LOCALMARKET_DATA_DIR", _DEFAULT_DATA_DIR)),
        log_level=env.get("LOCALMARKET_LOG_LEVEL", "INFO").upper(),
        log_json=env.get("LOCALMARKET_LOG_JSON", "").strip().lower() in _TRUTHY,
        cart_ttl_days=_int(env, "LOCALMARKET_CART_TTL_DAYS", 30),
        outbox_max_attempts=max(1, _int(env, "LOCALMARKET_OUTBOX_MAX_ATTEMPTS", 3)),
    )


def _int(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
