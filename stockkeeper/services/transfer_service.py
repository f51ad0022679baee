"""
Transfer Service — moves stock of one product between two warehouses.

Checks run in a fixed order and the first failure wins:

1. all four fields present and quantity > 0     -> MissingFieldsError
2. source and destination differ                -> SameWarehouseError
3. source warehouse holds a record for product  -> SourceNotFoundError
4. source quantity covers the request           -> InsufficientStockError

Nothing is mutated until every check has passed. The stock update and the
new history entry are committed in the same unit of work.
"""
import logging
from dataclasses import dataclass
from typing import List

from stockkeeper.core.exceptions import (
    InsufficientStockError,
    MissingFieldsError,
    SameWarehouseError,
    SourceNotFoundError,
)
from stockkeeper.database import StoreSession
from stockkeeper.repositories.base import as_int
from stockkeeper.repositories.stock_repository import StockRepository
from stockkeeper.repositories.transfer_repository import TransferRepository
from stockkeeper.schemas.transfer import TransferRequest
from stockkeeper.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)


@dataclass
class TransferResult:
    transfer: dict
    updated_stock: List[dict]


class TransferService:

    def __init__(self, db: StoreSession):
        self._db = db
        self._stock_repo = StockRepository(db)
        self._transfer_repo = TransferRepository(db)

    def list_history(self) -> List[dict]:
        return self._transfer_repo.list_recent()

    def transfer(self, payload: TransferRequest) -> TransferResult:
        from_id = payload.from_warehouse_id
        to_id = payload.to_warehouse_id
        product_id = payload.product_id
        quantity = payload.quantity

        missing = [
            name for name, value in (
                ("fromWarehouseId", from_id),
                ("toWarehouseId", to_id),
                ("productId", product_id),
                ("quantity", quantity),
            )
            if not value
        ]
        if missing:
            raise MissingFieldsError(missing)
        if quantity <= 0:
            raise MissingFieldsError(["quantity"])

        if from_id == to_id:
            raise SameWarehouseError(from_id)

        source = self._stock_repo.find_by_product_and_warehouse(product_id, from_id)
        if source is None:
            raise SourceNotFoundError(from_id, product_id)

        available = as_int(source.get("quantity")) or 0
        if available < quantity:
            raise InsufficientStockError(available=available, requested=quantity)

        try:
            self._stock_repo.update(source, {"quantity": available - quantity})
            self._stock_repo.add_quantity(product_id, to_id, quantity)
            entry = self._transfer_repo.append({
                "date": utc_now_iso(),
                "fromWarehouseId": from_id,
                "toWarehouseId": to_id,
                "productId": product_id,
                "quantity": quantity,
            })
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

        logger.info(
            "transfer_completed",
            extra={
                "transfer_id": entry["id"],
                "product_id": product_id,
                "from_warehouse_id": from_id,
                "to_warehouse_id": to_id,
                "quantity": quantity,
            },
        )
        return TransferResult(transfer=entry, updated_stock=self._stock_repo.get_all())
