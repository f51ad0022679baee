from stockkeeper.repositories.base import BaseRepository


class ProductRepository(BaseRepository):
    collection = "products"
