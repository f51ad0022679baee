"""
Dashboard Service — read-only inventory summary for the home screen.
"""
from collections import OrderedDict
from decimal import Decimal, InvalidOperation

from stockkeeper.config import settings
from stockkeeper.core.inventory_status import evaluate_inventory_status
from stockkeeper.database import StoreSession
from stockkeeper.repositories.base import as_int
from stockkeeper.repositories.product_repository import ProductRepository
from stockkeeper.repositories.stock_repository import StockRepository
from stockkeeper.repositories.warehouse_repository import WarehouseRepository
from stockkeeper.schemas.dashboard import (
    CategoryStockTotal,
    DashboardSummary,
    ProductInventoryLine,
    WarehouseStockTotal,
)

UNCATEGORIZED = "Uncategorized"


class DashboardService:

    def __init__(self, db: StoreSession):
        self._product_repo = ProductRepository(db)
        self._warehouse_repo = WarehouseRepository(db)
        self._stock_repo = StockRepository(db)

    def get_summary(self) -> DashboardSummary:
        products = self._product_repo.as_lookup()
        warehouses = self._warehouse_repo.as_lookup()
        stock = self._stock_repo.get_all()

        total_value = Decimal("0")
        by_warehouse: "OrderedDict[int, int]" = OrderedDict()
        by_category: "OrderedDict[str, int]" = OrderedDict()
        by_product: dict = {}

        for item in stock:
            quantity = as_int(item.get("quantity")) or 0
            product_id = as_int(item.get("productId"))
            warehouse_id = as_int(item.get("warehouseId"))

            if warehouse_id is not None:
                by_warehouse[warehouse_id] = by_warehouse.get(warehouse_id, 0) + quantity

            product = products.get(product_id)
            if product is None:
                continue
            total_value += self._unit_cost(product) * quantity
            category = product.get("category") or UNCATEGORIZED
            by_category[category] = by_category.get(category, 0) + quantity
            by_product[product_id] = by_product.get(product_id, 0) + quantity

        inventory = []
        for product_id, product in products.items():
            total_quantity = by_product.get(product_id, 0)
            reorder_point = as_int(product.get("reorderPoint"))
            if reorder_point is None:
                reorder_point = settings.DEFAULT_REORDER_POINT
            evaluation = evaluate_inventory_status(total_quantity, reorder_point)
            inventory.append(ProductInventoryLine(
                id=product_id,
                sku=product.get("sku") or "",
                name=product.get("name") or "",
                category=product.get("category") or UNCATEGORIZED,
                reorder_point=reorder_point,
                total_quantity=total_quantity,
                status=evaluation.status,
                is_low_stock=evaluation.is_actionable,
            ))
        inventory.sort(key=lambda line: line.name.lower())

        return DashboardSummary(
            product_count=len(self._product_repo.rows),
            warehouse_count=len(self._warehouse_repo.rows),
            total_value=total_value.quantize(Decimal("0.01")),
            stock_by_warehouse=[
                WarehouseStockTotal(
                    warehouse_id=warehouse_id,
                    name=(warehouses.get(warehouse_id) or {}).get("name") or f"Warehouse {warehouse_id}",
                    value=qty,
                )
                for warehouse_id, qty in by_warehouse.items()
            ],
            stock_by_category=[
                CategoryStockTotal(category=category, total_quantity=qty)
                for category, qty in by_category.items()
            ],
            inventory=inventory,
        )

    def _unit_cost(self, product: dict) -> Decimal:
        try:
            return Decimal(str(product.get("unitCost") or 0))
        except InvalidOperation:
            return Decimal("0")
