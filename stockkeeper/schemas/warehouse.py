from typing import Optional

from pydantic import Field

from stockkeeper.schemas.common import CamelModel, StoredRecord


class WarehouseBase(CamelModel):
    code: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field("", max_length=200)


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(CamelModel):
    code: Optional[str] = Field(None, min_length=1, max_length=32)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)


class WarehouseResponse(StoredRecord):
    id: int
    code: str = ""
    name: str = ""
    location: Optional[str] = None
