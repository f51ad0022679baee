"""
Base Repository — whole-collection access over a StoreSession.

Records are plain dicts (open field maps, camelCase keys). Mutating methods
change the session's working copy and mark the collection dirty; nothing is
written until the owning service commits the session.
"""
from typing import Any, Dict, List, Optional

from stockkeeper.database import StoreSession


def as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class BaseRepository:
    collection: str = ""

    def __init__(self, db: StoreSession):
        self.db = db

    @property
    def rows(self) -> List[dict]:
        return self.db.records(self.collection)

    def get_all(self) -> List[dict]:
        return list(self.rows)

    def get_by_id(self, record_id: Any) -> Optional[dict]:
        target = as_int(record_id)
        if target is None:
            return None
        return next((r for r in self.rows if as_int(r.get("id")) == target), None)

    def as_lookup(self) -> Dict[int, dict]:
        lookup: Dict[int, dict] = {}
        for row in self.rows:
            key = as_int(row.get("id"))
            if key is not None and key not in lookup:
                lookup[key] = row
        return lookup

    def next_id(self) -> int:
        ids = [i for i in (as_int(r.get("id")) for r in self.rows) if i is not None]
        return max(ids) + 1 if ids else 1

    def create(self, data: Dict[str, Any]) -> dict:
        record = {"id": self.next_id(), **{k: v for k, v in data.items() if k != "id"}}
        self.rows.append(record)
        self.db.mark_dirty(self.collection)
        return record

    def update(self, record: dict, updates: Dict[str, Any]) -> dict:
        record_id = record.get("id")
        record.update(updates)
        record["id"] = record_id
        self.db.mark_dirty(self.collection)
        return record

    def delete(self, record: dict) -> None:
        self.rows[:] = [r for r in self.rows if r is not record]
        self.db.mark_dirty(self.collection)
