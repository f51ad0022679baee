"""
Stock Router — Thin Controller
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.stock import StockCreate, StockResponse, StockUpdate
from stockkeeper.services.stock_service import StockService

router = APIRouter(prefix="/stock", tags=["Stock Levels"])


def get_stock_service(db: StoreSession = Depends(get_db)) -> StockService:
    return StockService(db)


@router.get("", response_model=List[StockResponse])
def list_stock(
    product_id: Optional[int] = Query(None, alias="productId"),
    warehouse_id: Optional[int] = Query(None, alias="warehouseId"),
    service: StockService = Depends(get_stock_service),
):
    return service.list_stock(product_id=product_id, warehouse_id=warehouse_id)


@router.post("", response_model=StockResponse, status_code=201)
def create_stock(payload: StockCreate, service: StockService = Depends(get_stock_service)):
    return service.create_stock(payload)


@router.get("/{stock_id}", response_model=StockResponse)
def get_stock(stock_id: int, service: StockService = Depends(get_stock_service)):
    return service.get_stock(stock_id)


@router.put("/{stock_id}", response_model=StockResponse)
def update_stock(
    stock_id: int,
    payload: StockUpdate,
    service: StockService = Depends(get_stock_service),
):
    return service.update_stock(stock_id, payload)


@router.delete("/{stock_id}", status_code=204, response_class=Response)
def delete_stock(stock_id: int, service: StockService = Depends(get_stock_service)):
    service.delete_stock(stock_id)
