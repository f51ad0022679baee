from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from stockkeeper.core.inventory_status import StockStatus
from stockkeeper.schemas.common import CamelModel, StoredRecord


class AlertAction(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REORDERED = "reordered"


class AlertResponse(StoredRecord):
    id: str
    product_id: int
    warehouse_id: int
    product_name: str
    warehouse_name: str
    status: StockStatus
    quantity: int
    reorder_point: int = 0
    reorder_qty: int
    action: AlertAction = AlertAction.PENDING


class AlertActionRequest(CamelModel):
    id: str
    action_type: Literal["resolved", "reordered"]


class OrderHistoryEntryResponse(StoredRecord):
    id: int
    timestamp: datetime
    product_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    product: str
    warehouse: str
    ordered_qty: int
    action: str = "reordered"
