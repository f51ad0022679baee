from typing import Any, Dict, List

from stockkeeper.repositories.base import BaseRepository


class TransferRepository(BaseRepository):
    """Transfer log, stored most-recent-first. Entries are never updated or removed."""

    collection = "transfers"

    def list_recent(self) -> List[dict]:
        return list(self.rows)

    def append(self, entry: Dict[str, Any]) -> dict:
        record = {"id": self.next_id(), **entry}
        self.rows.insert(0, record)
        self.db.mark_dirty(self.collection)
        return record
