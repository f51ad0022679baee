import json
import os

import pytest

from stockkeeper.core.exceptions import (
    ConcurrentModificationException,
    DuplicateStockRecordException,
    StorageException,
)
from stockkeeper.database import JsonFileStore, StoreSession, TTLCache
from stockkeeper.repositories.stock_repository import StockRepository


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def file_store(tmp_path, clock):
    store = JsonFileStore(tmp_path, cache=TTLCache(10, clock=clock))
    store.ensure_files()
    return store


def test_ttl_cache_expires_after_window(clock):
    cache = TTLCache(10, clock=clock)
    cache.put("stock", [1])
    clock.advance(9.9)
    assert cache.get("stock") == [1]
    clock.advance(0.1)
    assert cache.get("stock") is None


def test_ttl_cache_invalidate_and_clear(clock):
    cache = TTLCache(10, clock=clock)
    cache.put("stock", [1])
    cache.put("products", [2])
    cache.invalidate("stock")
    assert cache.get("stock") is None
    cache.clear()
    assert cache.get("products") is None


def test_ensure_files_creates_empty_arrays(file_store, tmp_path):
    for name in file_store.collections:
        assert json.loads((tmp_path / f"{name}.json").read_text()) == []


def test_missing_and_empty_files_read_as_empty(tmp_path):
    store = JsonFileStore(tmp_path)
    assert store.load_all("products") == []
    (tmp_path / "stock.json").write_text("   ")
    assert store.load_all("stock") == []


def test_malformed_file_raises_storage_error(file_store, tmp_path):
    (tmp_path / "products.json").write_text("[{not json")
    with pytest.raises(StorageException):
        file_store.load_all("products")


def test_non_array_file_raises_storage_error(file_store, tmp_path):
    (tmp_path / "products.json").write_text('{"id": 1}')
    with pytest.raises(StorageException):
        file_store.load_all("products")


def test_unknown_collection_is_rejected(file_store):
    with pytest.raises(ValueError):
        file_store.load_all("customers")


def test_reads_served_from_cache_within_ttl(file_store, tmp_path, clock):
    file_store.save_all("products", [{"id": 1, "name": "Widget"}])
    (tmp_path / "products.json").write_text('[{"id": 1, "name": "Edited on disk"}]')

    assert file_store.load_all("products")[0]["name"] == "Widget"
    clock.advance(10)
    assert file_store.load_all("products")[0]["name"] == "Edited on disk"


def test_loaded_records_are_private_copies(file_store):
    file_store.save_all("products", [{"id": 1, "name": "Widget"}])
    records = file_store.load_all("products")
    records[0]["name"] = "Mutated"
    records.append({"id": 2})
    assert file_store.load_all("products") == [{"id": 1, "name": "Widget"}]


def test_save_writes_pretty_printed_array(file_store, tmp_path):
    file_store.save_all("warehouses", [{"id": 1, "code": "WH-A"}])
    raw = (tmp_path / "warehouses.json").read_text()
    assert json.loads(raw) == [{"id": 1, "code": "WH-A"}]
    assert "\n  " in raw


def test_failed_write_leaves_every_collection_untouched(file_store, tmp_path):
    file_store.save_all("stock", [{"id": 1, "productId": 1, "warehouseId": 1, "quantity": 5}])
    before = (tmp_path / "stock.json").read_text()

    with pytest.raises(StorageException):
        file_store.write_many({
            "stock": [{"id": 1, "productId": 1, "warehouseId": 1, "quantity": 0}],
            "transfers": [{"id": 1, "payload": object()}],
        })

    assert (tmp_path / "stock.json").read_text() == before
    assert not list(tmp_path.glob("*.tmp"))


def test_session_commit_writes_only_dirty_collections(file_store):
    session = StoreSession(file_store)
    session.records("products").append({"id": 1})
    session.records("warehouses").append({"id": 1})
    session.mark_dirty("products")
    session.commit()

    assert file_store.load_all("products") == [{"id": 1}]
    assert file_store.load_all("warehouses") == []
    assert session.dirty == frozenset()


def test_session_rollback_discards_changes(file_store):
    session = StoreSession(file_store)
    session.records("products").append({"id": 1})
    session.mark_dirty("products")
    session.rollback()
    session.commit()
    assert file_store.load_all("products") == []
    assert session.records("products") == []


def test_stale_session_commit_is_rejected(file_store):
    file_store.save_all("stock", [{"id": 1, "productId": 1, "warehouseId": 1, "quantity": 10}])
    first = StoreSession(file_store)
    second = StoreSession(file_store)

    first.records("stock")[0]["quantity"] = 4
    first.mark_dirty("stock")
    second.records("stock")[0]["quantity"] = 7
    second.mark_dirty("stock")

    first.commit()
    with pytest.raises(ConcurrentModificationException):
        second.commit()
    assert file_store.load_all("stock")[0]["quantity"] == 4


def test_duplicate_stock_pair_is_rejected(file_store):
    file_store.save_all("stock", [{"id": 1, "productId": 1, "warehouseId": 1, "quantity": 10}])
    repo = StockRepository(StoreSession(file_store))
    with pytest.raises(DuplicateStockRecordException):
        repo.create({"productId": 1, "warehouseId": 1, "quantity": 3})


def test_add_quantity_creates_missing_pair_with_next_id(file_store):
    file_store.save_all("stock", [
        {"id": 4, "productId": 1, "warehouseId": 1, "quantity": 10},
        {"id": 9, "productId": 2, "warehouseId": 1, "quantity": 1},
    ])
    repo = StockRepository(StoreSession(file_store))
    record = repo.add_quantity(1, 2, 6)
    assert record == {"id": 10, "productId": 1, "warehouseId": 2, "quantity": 6}


def test_check_health_reports_malformed_collection(file_store, tmp_path):
    assert file_store.check_health() == (True, None)
    (tmp_path / "alerts.json").write_text("{")
    ok, error = file_store.check_health()
    assert ok is False
    assert "alerts" in error


def _fail_nth_replace(monkeypatch, n: int):
    real_replace = os.replace
    calls = []

    def flaky_replace(src, dst):
        calls.append(dst)
        if len(calls) == n:
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", flaky_replace)


def test_failed_rename_restores_already_replaced_collections(file_store, tmp_path, monkeypatch):
    file_store.save_all("stock", [{"id": 1, "productId": 7, "warehouseId": 1, "quantity": 50}])
    stock_before = (tmp_path / "stock.json").read_text()
    _fail_nth_replace(monkeypatch, 2)

    with pytest.raises(StorageException):
        file_store.write_many({
            "stock": [{"id": 1, "productId": 7, "warehouseId": 1, "quantity": 20}],
            "transfers": [{"id": 1, "productId": 7, "quantity": 30}],
        })

    assert (tmp_path / "stock.json").read_text() == stock_before
    assert json.loads((tmp_path / "transfers.json").read_text()) == []
    assert file_store.load_all("stock")[0]["quantity"] == 50
    assert file_store.version("stock") == 1
    assert not list(tmp_path.glob("*.tmp"))


def test_failed_rename_removes_newly_created_file(tmp_path, monkeypatch):
    store = JsonFileStore(tmp_path)
    _fail_nth_replace(monkeypatch, 2)

    with pytest.raises(StorageException):
        store.write_many({"alerts": [{"id": "1-1-low"}], "order_history": [{"id": 1}]})

    assert not (tmp_path / "alerts.json").exists()
    assert not (tmp_path / "order_history.json").exists()


def test_quantity_update_ignores_preexisting_duplicate_pair(file_store):
    file_store.save_all("stock", [
        {"id": 1, "productId": 1, "warehouseId": 1, "quantity": 10},
        {"id": 2, "productId": 1, "warehouseId": 1, "quantity": 3},
    ])
    repo = StockRepository(StoreSession(file_store))
    second = repo.get_by_id(2)
    assert repo.update(second, {"quantity": 8, "productId": 1})["quantity"] == 8


def test_moving_stock_onto_taken_pair_is_rejected(file_store):
    file_store.save_all("stock", [
        {"id": 1, "productId": 1, "warehouseId": 1, "quantity": 10},
        {"id": 2, "productId": 1, "warehouseId": 2, "quantity": 3},
    ])
    repo = StockRepository(StoreSession(file_store))
    with pytest.raises(DuplicateStockRecordException):
        repo.update(repo.get_by_id(2), {"warehouseId": 1})
