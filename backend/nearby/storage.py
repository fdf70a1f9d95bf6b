from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from .contracts import Restaurant
from .logging_config import get_logger
from .metrics import store_operations_total

logger = get_logger(__name__)


class StoreError(RuntimeError):
    pass


class RestaurantStore(Protocol):
    def read_all(self) -> list[Restaurant]: ...

    def get(self, restaurant_id: str) -> Restaurant | None: ...

    def append(self, record: Restaurant) -> None: ...

    def remove_by_id(self, restaurant_id: str) -> int: ...


class JsonFileStore:
    """
    Restaurant records kept in a single JSON document: ``{"restaurants": [...]}``.

    The file is read again on every call so edits made by other processes are
    picked up. Writes replace the file atomically, but nothing locks the
    read-modify-write cycle: two concurrent writers can lose an update and the
    last write wins.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> list[dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._dump([])
            return []
        payload = raw.strip()
        if not payload:
            return []
        try:
            document = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid restaurant store: {self.path}") from exc
        if not isinstance(document, dict):
            raise StoreError(f"Invalid restaurant store: {self.path}")
        rows = document.get("restaurants", [])
        if not isinstance(rows, list):
            raise StoreError(f"Invalid restaurant store: {self.path}")
        return [row for row in rows if isinstance(row, dict)]

    def _dump(self, rows: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump({"restaurants": rows}, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def read_all(self) -> list[Restaurant]:
        store_operations_total.labels(operation="read_all").inc()
        records: list[Restaurant] = []
        for row in self._load():
            try:
                records.append(Restaurant.model_validate(row))
            except ValidationError:
                logger.warning("store_row_skipped", path=str(self.path), row_id=row.get("id"))
        return records

    def get(self, restaurant_id: str) -> Restaurant | None:
        for record in self.read_all():
            if record.id == restaurant_id:
                return record
        return None

    def append(self, record: Restaurant) -> None:
        store_operations_total.labels(operation="append").inc()
        rows = self._load()
        rows.append(record.to_json())
        self._dump(rows)

    def remove_by_id(self, restaurant_id: str) -> int:
        store_operations_total.labels(operation="remove").inc()
        rows = self._load()
        kept = [row for row in rows if row.get("id") != restaurant_id]
        self._dump(kept)
        return len(rows) - len(kept)


class InMemoryStore:
    def __init__(self, records: list[Restaurant] | None = None) -> None:
        self._records: list[Restaurant] = list(records or [])

    def read_all(self) -> list[Restaurant]:
        return list(self._records)

    def get(self, restaurant_id: str) -> Restaurant | None:
        return next((r for r in self._records if r.id == restaurant_id), None)

    def append(self, record: Restaurant) -> None:
        self._records.append(record)

    def remove_by_id(self, restaurant_id: str) -> int:
        before = len(self._records)
        self._records = [r for r in self._records if r.id != restaurant_id]
        return before - len(self._records)


__all__ = ["InMemoryStore", "JsonFileStore", "RestaurantStore", "StoreError"]
