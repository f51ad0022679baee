from stockkeeper.schemas.common import CamelModel, StoredRecord
from stockkeeper.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from stockkeeper.schemas.warehouse import WarehouseCreate, WarehouseUpdate, WarehouseResponse
from stockkeeper.schemas.stock import StockCreate, StockUpdate, StockResponse
from stockkeeper.schemas.transfer import TransferRequest, TransferRecordResponse, TransferResponse
from stockkeeper.schemas.alert import (
    AlertAction,
    AlertResponse,
    AlertActionRequest,
    OrderHistoryEntryResponse,
)
from stockkeeper.schemas.dashboard import (
    WarehouseStockTotal,
    CategoryStockTotal,
    ProductInventoryLine,
    DashboardSummary,
)
