from decimal import Decimal
from typing import List

from stockkeeper.core.inventory_status import StockStatus
from stockkeeper.schemas.common import CamelModel


class WarehouseStockTotal(CamelModel):
    warehouse_id: int
    name: str
    value: int


class CategoryStockTotal(CamelModel):
    category: str
    total_quantity: int


class ProductInventoryLine(CamelModel):
    id: int
    sku: str
    name: str
    category: str
    reorder_point: int
    total_quantity: int
    status: StockStatus
    is_low_stock: bool


class DashboardSummary(CamelModel):
    product_count: int
    warehouse_count: int
    total_value: Decimal
    stock_by_warehouse: List[WarehouseStockTotal]
    stock_by_category: List[CategoryStockTotal]
    inventory: List[ProductInventoryLine]
