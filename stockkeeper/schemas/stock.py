from typing import Optional

from pydantic import Field

from stockkeeper.schemas.common import CamelModel, StoredRecord


class StockCreate(CamelModel):
    product_id: int = Field(..., ge=1)
    warehouse_id: int = Field(..., ge=1)
    quantity: int = Field(0, ge=0)


class StockUpdate(CamelModel):
    product_id: Optional[int] = Field(None, ge=1)
    warehouse_id: Optional[int] = Field(None, ge=1)
    quantity: Optional[int] = Field(None, ge=0)


class StockResponse(StoredRecord):
    id: int
    product_id: int
    warehouse_id: int
    quantity: int = 0
