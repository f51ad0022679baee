from stockkeeper.repositories.base import BaseRepository


class WarehouseRepository(BaseRepository):
    collection = "warehouses"
