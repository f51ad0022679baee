from typing import Any, Dict, List

from stockkeeper.repositories.base import BaseRepository


class OrderHistoryRepository(BaseRepository):
    """Replenishment orders placed from alerts, oldest first. Append-only."""

    collection = "order_history"

    def list_entries(self) -> List[dict]:
        return list(self.rows)

    def append(self, entry: Dict[str, Any]) -> dict:
        record = {"id": self.next_id(), **entry}
        self.rows.append(record)
        self.db.mark_dirty(self.collection)
        return record
