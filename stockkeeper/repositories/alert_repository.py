from typing import Any, List, Optional

from stockkeeper.repositories.base import BaseRepository, as_int


class AlertRepository(BaseRepository):
    collection = "alerts"

    def get_by_id(self, alert_id: Any) -> Optional[dict]:
        target = str(alert_id)
        return next((r for r in self.rows if str(r.get("id")) == target), None)

    def find_previous(self, product_id: int, warehouse_id: int, status: str) -> Optional[dict]:
        """Stored alert for the same line and status that has not been reordered yet."""
        return next(
            (
                r for r in self.rows
                if as_int(r.get("productId")) == product_id
                and as_int(r.get("warehouseId")) == warehouse_id
                and r.get("status") == status
                and r.get("action") != "reordered"
            ),
            None,
        )

    def replace_all(self, alerts: List[dict]) -> None:
        self.rows[:] = alerts
        self.db.mark_dirty(self.collection)
