"""
Stock Repository

Holds the (productId, warehouseId) -> record invariant: at most one stock
record per pair. Creates and updates that would produce a second record for
a pair raise DuplicateStockRecordException.
"""
from typing import Any, Dict, List, Optional

from stockkeeper.core.exceptions import DuplicateStockRecordException
from stockkeeper.repositories.base import BaseRepository, as_int


class StockRepository(BaseRepository):
    collection = "stock"

    def find_by_product_and_warehouse(self, product_id: Any, warehouse_id: Any) -> Optional[dict]:
        key = (as_int(product_id), as_int(warehouse_id))
        return next(
            (r for r in self.rows if (as_int(r.get("productId")), as_int(r.get("warehouseId"))) == key),
            None,
        )

    def list_filtered(
        self,
        product_id: Optional[int] = None,
        warehouse_id: Optional[int] = None,
    ) -> List[dict]:
        rows = self.rows
        if product_id is not None:
            rows = [r for r in rows if as_int(r.get("productId")) == product_id]
        if warehouse_id is not None:
            rows = [r for r in rows if as_int(r.get("warehouseId")) == warehouse_id]
        return list(rows)

    def create(self, data: Dict[str, Any]) -> dict:
        if self.find_by_product_and_warehouse(data.get("productId"), data.get("warehouseId")):
            raise DuplicateStockRecordException(data.get("productId"), data.get("warehouseId"))
        return super().create(data)

    def update(self, record: dict, updates: Dict[str, Any]) -> dict:
        product_id = updates.get("productId", record.get("productId"))
        warehouse_id = updates.get("warehouseId", record.get("warehouseId"))
        current_key = (as_int(record.get("productId")), as_int(record.get("warehouseId")))
        if (as_int(product_id), as_int(warehouse_id)) != current_key:
            existing = self.find_by_product_and_warehouse(product_id, warehouse_id)
            if existing is not None and existing is not record:
                raise DuplicateStockRecordException(product_id, warehouse_id)
        return super().update(record, updates)

    def add_quantity(self, product_id: int, warehouse_id: int, quantity: int) -> dict:
        """Increase the pair's quantity, creating the record when it does not exist."""
        record = self.find_by_product_and_warehouse(product_id, warehouse_id)
        if record is None:
            return self.create({"productId": product_id, "warehouseId": warehouse_id, "quantity": quantity})
        return self.update(record, {"quantity": (as_int(record.get("quantity")) or 0) + quantity})
