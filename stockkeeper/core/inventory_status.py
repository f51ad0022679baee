"""
Stock status classification.

Thresholds, relative to the product's reorder point:

    quantity <= 0                   critical
    quantity <= reorder_point       low
    quantity >= 3 * reorder_point   overstocked
    otherwise                       adequate

Critical and low lines get a recommended reorder quantity of
``max(2 * reorder_point - quantity, reorder_point)``; every other status
recommends nothing.
"""
from dataclasses import dataclass
from enum import Enum


OVERSTOCK_MULTIPLIER = 3
REORDER_TARGET_MULTIPLIER = 2


class StockStatus(str, Enum):
    CRITICAL = "critical"
    LOW = "low"
    ADEQUATE = "adequate"
    OVERSTOCKED = "overstocked"


ACTIONABLE_STATUSES = frozenset({StockStatus.CRITICAL, StockStatus.LOW})


@dataclass(frozen=True)
class StatusEvaluation:
    status: StockStatus
    reorder_qty: int

    @property
    def is_actionable(self) -> bool:
        return self.status in ACTIONABLE_STATUSES


def recommended_reorder_qty(quantity: int, reorder_point: int) -> int:
    return max(reorder_point * REORDER_TARGET_MULTIPLIER - quantity, reorder_point)


def evaluate_inventory_status(quantity: int, reorder_point: int) -> StatusEvaluation:
    if quantity <= 0:
        status = StockStatus.CRITICAL
    elif quantity <= reorder_point:
        status = StockStatus.LOW
    elif quantity >= reorder_point * OVERSTOCK_MULTIPLIER:
        status = StockStatus.OVERSTOCKED
    else:
        status = StockStatus.ADEQUATE

    reorder_qty = 0
    if status in ACTIONABLE_STATUSES:
        reorder_qty = recommended_reorder_qty(quantity, reorder_point)
    return StatusEvaluation(status=status, reorder_qty=reorder_qty)
