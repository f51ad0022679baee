# Repository layer: data access over the JSON record store
from stockkeeper.repositories.base import BaseRepository
from stockkeeper.repositories.product_repository import ProductRepository
from stockkeeper.repositories.warehouse_repository import WarehouseRepository
from stockkeeper.repositories.stock_repository import StockRepository
from stockkeeper.repositories.transfer_repository import TransferRepository
from stockkeeper.repositories.alert_repository import AlertRepository
from stockkeeper.repositories.order_history_repository import OrderHistoryRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "WarehouseRepository",
    "StockRepository",
    "TransferRepository",
    "AlertRepository",
    "OrderHistoryRepository",
]
