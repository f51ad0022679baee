"""
Alert Service — low-stock alert generation and alert actions.

Alerts are a derived view: every generation re-classifies each stock line
and replaces the stored alert list. Only the ``action`` of an alert survives
a regeneration, carried forward by matching (productId, warehouseId, status)
against the previous list.
"""
import logging
from typing import List

from stockkeeper.config import settings
from stockkeeper.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from stockkeeper.core.inventory_status import evaluate_inventory_status
from stockkeeper.database import StoreSession
from stockkeeper.repositories.alert_repository import AlertRepository
from stockkeeper.repositories.base import as_int
from stockkeeper.repositories.order_history_repository import OrderHistoryRepository
from stockkeeper.repositories.product_repository import ProductRepository
from stockkeeper.repositories.stock_repository import StockRepository
from stockkeeper.repositories.warehouse_repository import WarehouseRepository
from stockkeeper.schemas.alert import AlertAction
from stockkeeper.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)


def alert_key(product_id: int, warehouse_id: int, status: str) -> str:
    return f"{product_id}-{warehouse_id}-{status}"


class AlertService:

    def __init__(self, db: StoreSession):
        self._db = db
        self._alert_repo = AlertRepository(db)
        self._stock_repo = StockRepository(db)
        self._product_repo = ProductRepository(db)
        self._warehouse_repo = WarehouseRepository(db)
        self._order_repo = OrderHistoryRepository(db)

    def generate_alerts(self) -> List[dict]:
        products = self._product_repo.as_lookup()
        warehouses = self._warehouse_repo.as_lookup()

        alerts: List[dict] = []
        seen = set()
        for item in self._stock_repo.get_all():
            product_id = as_int(item.get("productId"))
            warehouse_id = as_int(item.get("warehouseId"))
            product = products.get(product_id)
            warehouse = warehouses.get(warehouse_id)
            if product is None or warehouse is None:
                continue

            quantity = as_int(item.get("quantity")) or 0
            reorder_point = as_int(product.get("reorderPoint"))
            if reorder_point is None:
                reorder_point = settings.DEFAULT_REORDER_POINT

            evaluation = evaluate_inventory_status(quantity, reorder_point)
            if not evaluation.is_actionable:
                continue

            status = evaluation.status.value
            previous = self._alert_repo.find_previous(product_id, warehouse_id, status)
            alert_id = previous["id"] if previous else alert_key(product_id, warehouse_id, status)
            if alert_id in seen:
                continue
            seen.add(alert_id)

            alerts.append({
                "id": alert_id,
                "productId": product_id,
                "warehouseId": warehouse_id,
                "productName": product.get("name") or "Unknown Product",
                "warehouseName": warehouse.get("name") or "Unknown Warehouse",
                "status": status,
                "quantity": quantity,
                "reorderPoint": reorder_point,
                "reorderQty": evaluation.reorder_qty,
                "action": previous.get("action", AlertAction.PENDING.value) if previous else AlertAction.PENDING.value,
            })

        if alerts != self._alert_repo.get_all():
            self._alert_repo.replace_all(alerts)
            self._db.commit()
            logger.info("alerts_generated", extra={"alert_count": len(alerts)})
        return alerts

    def apply_action(self, alert_id: str, action_type: str) -> List[dict]:
        action = AlertAction(action_type)
        alert = self._alert_repo.get_by_id(alert_id)
        if alert is None:
            raise EntityNotFoundException("Alert", alert_id)
        if action is AlertAction.REORDERED and alert.get("action") == AlertAction.REORDERED.value:
            raise BusinessRuleViolationException(f"Alert {alert_id} has already been reordered.")

        try:
            self._alert_repo.update(alert, {"action": action.value})
            if action is AlertAction.REORDERED:
                self._place_reorder(alert)
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

        logger.info("alert_action_applied", extra={"alert_id": alert_id, "action": action.value})
        return self._alert_repo.get_all()

    def list_order_history(self) -> List[dict]:
        return self._order_repo.list_entries()

    def _place_reorder(self, alert: dict) -> dict:
        product_id = as_int(alert.get("productId"))
        warehouse_id = as_int(alert.get("warehouseId"))
        ordered_qty = as_int(alert.get("reorderQty")) or 0

        self._stock_repo.add_quantity(product_id, warehouse_id, ordered_qty)
        return self._order_repo.append({
            "timestamp": utc_now_iso(),
            "productId": product_id,
            "warehouseId": warehouse_id,
            "product": alert.get("productName"),
            "warehouse": alert.get("warehouseName"),
            "orderedQty": ordered_qty,
            "action": AlertAction.REORDERED.value,
        })
