"""
Stock Service — Service Layer

Stock lines must reference an existing product and warehouse; the
one-record-per-pair rule is enforced by StockRepository.
"""
import logging
from typing import List, Optional

from stockkeeper.core.exceptions import EntityNotFoundException
from stockkeeper.database import StoreSession
from stockkeeper.repositories.product_repository import ProductRepository
from stockkeeper.repositories.stock_repository import StockRepository
from stockkeeper.repositories.warehouse_repository import WarehouseRepository
from stockkeeper.schemas.stock import StockCreate, StockUpdate

logger = logging.getLogger(__name__)


class StockService:

    def __init__(self, db: StoreSession):
        self._db = db
        self._repo = StockRepository(db)
        self._product_repo = ProductRepository(db)
        self._warehouse_repo = WarehouseRepository(db)

    def list_stock(self, product_id: Optional[int] = None, warehouse_id: Optional[int] = None) -> List[dict]:
        return self._repo.list_filtered(product_id=product_id, warehouse_id=warehouse_id)

    def get_stock(self, stock_id: int) -> dict:
        record = self._repo.get_by_id(stock_id)
        if not record:
            raise EntityNotFoundException("StockRecord", stock_id)
        return record

    def create_stock(self, data: StockCreate) -> dict:
        self._ensure_references(data.product_id, data.warehouse_id)
        record = self._repo.create(data.model_dump(by_alias=True))
        self._db.commit()
        logger.info(
            "stock_created",
            extra={
                "stock_id": record["id"],
                "product_id": data.product_id,
                "warehouse_id": data.warehouse_id,
                "quantity": data.quantity,
            },
        )
        return record

    def update_stock(self, stock_id: int, data: StockUpdate) -> dict:
        record = self.get_stock(stock_id)
        updates = data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        self._ensure_references(updates.get("productId"), updates.get("warehouseId"))
        result = self._repo.update(record, updates)
        self._db.commit()
        return result

    def delete_stock(self, stock_id: int) -> None:
        record = self.get_stock(stock_id)
        self._repo.delete(record)
        self._db.commit()
        logger.info("stock_deleted", extra={"stock_id": stock_id})

    def _ensure_references(self, product_id: Optional[int], warehouse_id: Optional[int]) -> None:
        if product_id is not None and not self._product_repo.get_by_id(product_id):
            raise EntityNotFoundException("Product", product_id)
        if warehouse_id is not None and not self._warehouse_repo.get_by_id(warehouse_id):
            raise EntityNotFoundException("Warehouse", warehouse_id)
