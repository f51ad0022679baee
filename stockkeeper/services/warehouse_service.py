"""
Warehouse Service — Service Layer
"""
import logging
from typing import List

from stockkeeper.core.exceptions import EntityNotFoundException
from stockkeeper.database import StoreSession
from stockkeeper.repositories.warehouse_repository import WarehouseRepository
from stockkeeper.schemas.warehouse import WarehouseCreate, WarehouseUpdate

logger = logging.getLogger(__name__)


class WarehouseService:

    def __init__(self, db: StoreSession):
        self._db = db
        self._repo = WarehouseRepository(db)

    def list_warehouses(self) -> List[dict]:
        return self._repo.get_all()

    def get_warehouse(self, warehouse_id: int) -> dict:
        warehouse = self._repo.get_by_id(warehouse_id)
        if not warehouse:
            raise EntityNotFoundException("Warehouse", warehouse_id)
        return warehouse

    def create_warehouse(self, data: WarehouseCreate) -> dict:
        warehouse = self._repo.create(data.model_dump(by_alias=True))
        self._db.commit()
        logger.info("warehouse_created", extra={"warehouse_id": warehouse["id"], "code": warehouse.get("code")})
        return warehouse

    def update_warehouse(self, warehouse_id: int, data: WarehouseUpdate) -> dict:
        warehouse = self.get_warehouse(warehouse_id)
        updates = data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        result = self._repo.update(warehouse, updates)
        self._db.commit()
        return result

    def delete_warehouse(self, warehouse_id: int) -> None:
        warehouse = self.get_warehouse(warehouse_id)
        self._repo.delete(warehouse)
        self._db.commit()
        logger.info("warehouse_deleted", extra={"warehouse_id": warehouse_id})
