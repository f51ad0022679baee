import pytest
from fastapi.testclient import TestClient

from stockkeeper.config import settings
from stockkeeper.database import StoreSession, get_store
from stockkeeper.main import app


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", str(tmp_path))
    get_store.cache_clear()
    yield tmp_path
    get_store.cache_clear()


@pytest.fixture
def store(data_dir):
    return get_store()


@pytest.fixture
def db(store):
    session = StoreSession(store)
    yield session
    session.close()


@pytest.fixture
def client(data_dir):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(store):
    """Two products in two warehouses.

    Widget   (reorder point 10): Alpha 50 (overstocked), Bravo 5 (low)
    Gadget   (reorder point 5):  Alpha 0 (critical),   Bravo 7 (adequate)
    """
    store.save_all("products", [
        {"id": 1, "sku": "SKU-001", "name": "Widget", "category": "Hardware", "unitCost": 2.5, "reorderPoint": 10},
        {"id": 2, "sku": "SKU-002", "name": "Gadget", "category": "Electronics", "unitCost": 10, "reorderPoint": 5},
    ])
    store.save_all("warehouses", [
        {"id": 1, "code": "WH-A", "name": "Alpha", "location": "North"},
        {"id": 2, "code": "WH-B", "name": "Bravo", "location": "South"},
    ])
    store.save_all("stock", [
        {"id": 1, "productId": 1, "warehouseId": 1, "quantity": 50},
        {"id": 2, "productId": 1, "warehouseId": 2, "quantity": 5},
        {"id": 3, "productId": 2, "warehouseId": 1, "quantity": 0},
        {"id": 4, "productId": 2, "warehouseId": 2, "quantity": 7},
    ])
    return store
