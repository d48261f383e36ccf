"""A JSON file acting as one document-store collection.

Each collection is a file holding a list of documents keyed by ``id``.
File-system and decoding failures surface as PersistenceError so the
application layer only ever sees domain exceptions.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from localmarket.domain.exceptions import PersistenceError
from localmarket.domain.model.value_objects import Money


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def name(self) -> str:
        return self._file_path.stem

    def all(self) -> list[dict]:
        return self._load_raw()

    def find(self, doc_id: str) -> dict | None:
        for raw in self._load_raw():
            if raw["id"] == doc_id:
                return raw
        return None

    def upsert(self, document: dict) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["id"] == document["id"]:
                records[i] = document
                break
        else:
            records.append(document)
        self._persist_raw(records)

    def delete(self, doc_id: str) -> None:
        records = self._load_raw()
        remaining = [raw for raw in records if raw["id"] != doc_id]
        if len(remaining) != len(records):
            self._persist_raw(remaining)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read collection '{self.name}': {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Could not write collection '{self.name}': {exc}") from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not create collection '{self.name}': {exc}") from exc


# --- Field codecs -------------------------------------------------------------


def money_to_raw(money: Money | None) -> str | None:
    return None if money is None else str(money.amount)


def money_from_raw(raw: str | None, currency: str = "USD") -> Money | None:
    return None if raw is None else Money(Decimal(raw), currency)


def dt_to_raw(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def dt_from_raw(raw: str | None) -> datetime | None:
    return None if raw is None else datetime.fromisoformat(raw)


def compact(document: dict) -> dict:
    """Drop ``None`` fields so optional values are simply absent."""
    return {key: value for key, value in document.items() if value is not None}
