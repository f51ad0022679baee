from decimal import Decimal
from typing import Optional

from pydantic import Field

from stockkeeper.schemas.common import CamelModel, StoredRecord


class ProductBase(CamelModel):
    sku: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field("", max_length=100)
    unit_cost: Decimal = Field(Decimal("0"), ge=0)
    reorder_point: int = Field(0, ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = Field(None, max_length=100)
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    reorder_point: Optional[int] = Field(None, ge=0)


class ProductResponse(StoredRecord):
    id: int
    sku: str = ""
    name: str = ""
    category: Optional[str] = None
    unit_cost: Decimal = Decimal("0")
    reorder_point: int = 0
