"""
Products Router — Thin Controller
"""
from typing import List

from fastapi import APIRouter, Depends, Response

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from stockkeeper.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(db: StoreSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("", response_model=List[ProductResponse])
def list_products(service: ProductService = Depends(get_product_service)):
    return service.list_products()


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    return service.create_product(payload)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return service.get_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(product_id, payload)


@router.delete("/{product_id}", status_code=204, response_class=Response)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
