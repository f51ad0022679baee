"""
Warehouses Router — Thin Controller
"""
from typing import List

from fastapi import APIRouter, Depends, Response

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.warehouse import WarehouseCreate, WarehouseResponse, WarehouseUpdate
from stockkeeper.services.warehouse_service import WarehouseService

router = APIRouter(prefix="/warehouses", tags=["Warehouses"])


def get_warehouse_service(db: StoreSession = Depends(get_db)) -> WarehouseService:
    return WarehouseService(db)


@router.get("", response_model=List[WarehouseResponse])
def list_warehouses(service: WarehouseService = Depends(get_warehouse_service)):
    return service.list_warehouses()


@router.post("", response_model=WarehouseResponse, status_code=201)
def create_warehouse(
    payload: WarehouseCreate,
    service: WarehouseService = Depends(get_warehouse_service),
):
    return service.create_warehouse(payload)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(warehouse_id: int, service: WarehouseService = Depends(get_warehouse_service)):
    return service.get_warehouse(warehouse_id)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(
    warehouse_id: int,
    payload: WarehouseUpdate,
    service: WarehouseService = Depends(get_warehouse_service),
):
    return service.update_warehouse(warehouse_id, payload)


@router.delete("/{warehouse_id}", status_code=204, response_class=Response)
def delete_warehouse(warehouse_id: int, service: WarehouseService = Depends(get_warehouse_service)):
    service.delete_warehouse(warehouse_id)
