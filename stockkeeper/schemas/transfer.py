from datetime import datetime
from typing import List, Optional

from stockkeeper.schemas.common import CamelModel, StoredRecord
from stockkeeper.schemas.stock import StockResponse


class TransferRequest(CamelModel):
    # All optional: presence is checked by the transfer service so a missing
    # field yields MISSING_FIELDS rather than a schema error.
    from_warehouse_id: Optional[int] = None
    to_warehouse_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class TransferRecordResponse(StoredRecord):
    id: int
    date: datetime
    from_warehouse_id: int
    to_warehouse_id: int
    product_id: int
    quantity: int


class TransferResponse(CamelModel):
    success: bool = True
    message: str
    transfer: TransferRecordResponse
    updated_stock: List[StockResponse]
