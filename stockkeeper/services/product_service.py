"""
Product Service — Service Layer
"""
import logging
from typing import List

from stockkeeper.core.exceptions import EntityNotFoundException
from stockkeeper.database import StoreSession
from stockkeeper.repositories.product_repository import ProductRepository
from stockkeeper.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, db: StoreSession):
        self._db = db
        self._repo = ProductRepository(db)

    def list_products(self) -> List[dict]:
        return self._repo.get_all()

    def get_product(self, product_id: int) -> dict:
        product = self._repo.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("Product", product_id)
        return product

    def create_product(self, data: ProductCreate) -> dict:
        product = self._repo.create(data.model_dump(by_alias=True))
        self._db.commit()
        logger.info("product_created", extra={"product_id": product["id"], "sku": product.get("sku")})
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> dict:
        product = self.get_product(product_id)
        updates = data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        result = self._repo.update(product, updates)
        self._db.commit()
        return result

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self._repo.delete(product)
        self._db.commit()
        logger.info("product_deleted", extra={"product_id": product_id})
