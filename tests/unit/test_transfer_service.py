import logging
import os

import pytest

from stockkeeper.core.exceptions import (
    InsufficientStockError,
    MissingFieldsError,
    SameWarehouseError,
    SourceNotFoundError,
    StorageException,
)
from stockkeeper.database import StoreSession
from stockkeeper.schemas.transfer import TransferRequest
from stockkeeper.services.transfer_service import TransferService


def _request(**overrides) -> TransferRequest:
    payload = {"fromWarehouseId": 1, "toWarehouseId": 2, "productId": 7, "quantity": 30}
    payload.update(overrides)
    return TransferRequest.model_validate(payload)


def _quantity(store, product_id, warehouse_id):
    for item in store.load_all("stock"):
        if item["productId"] == product_id and item["warehouseId"] == warehouse_id:
            return item["quantity"]
    return None


@pytest.fixture
def stocked(store):
    store.save_all("stock", [{"id": 1, "productId": 7, "warehouseId": 1, "quantity": 50}])
    return store


def test_transfer_creates_destination_record(db, stocked):
    result = TransferService(db).transfer(_request())

    assert _quantity(stocked, 7, 1) == 20
    assert _quantity(stocked, 7, 2) == 30
    created = next(s for s in stocked.load_all("stock") if s["warehouseId"] == 2)
    assert created["id"] == 2
    assert result.transfer["id"] == 1
    assert result.transfer["quantity"] == 30
    assert len(result.updated_stock) == 2
    assert len(stocked.load_all("transfers")) == 1


def test_transfer_conserves_total_quantity(db, stocked):
    stocked.save_all("stock", [
        {"id": 1, "productId": 7, "warehouseId": 1, "quantity": 50},
        {"id": 2, "productId": 7, "warehouseId": 2, "quantity": 12},
    ])
    TransferService(db).transfer(_request(quantity=50))

    assert _quantity(stocked, 7, 1) == 0
    assert _quantity(stocked, 7, 2) == 62
    assert len(stocked.load_all("stock")) == 2


def test_insufficient_stock_changes_nothing(db, stocked):
    with pytest.raises(InsufficientStockError) as exc_info:
        TransferService(db).transfer(_request(quantity=51))

    assert exc_info.value.available == 50
    assert _quantity(stocked, 7, 1) == 50
    assert _quantity(stocked, 7, 2) is None
    assert stocked.load_all("transfers") == []


def test_same_warehouse_checked_before_stock(db, stocked):
    with pytest.raises(SameWarehouseError):
        TransferService(db).transfer(_request(toWarehouseId=1, quantity=500))


def test_missing_fields_checked_first(db, stocked):
    with pytest.raises(MissingFieldsError) as exc_info:
        TransferService(db).transfer(_request(productId=None, toWarehouseId=1))
    assert exc_info.value.details["fields"] == ["productId"]


@pytest.mark.parametrize("quantity", [0, -5, None])
def test_non_positive_quantity_is_missing_field(db, stocked, quantity):
    with pytest.raises(MissingFieldsError):
        TransferService(db).transfer(_request(quantity=quantity))


def test_source_without_product_is_rejected(db, stocked):
    with pytest.raises(SourceNotFoundError):
        TransferService(db).transfer(_request(fromWarehouseId=3))
    assert stocked.load_all("transfers") == []


def test_history_is_most_recent_first(store, stocked):
    for quantity in (5, 10):
        session = StoreSession(store)
        TransferService(session).transfer(_request(quantity=quantity))
        session.close()

    history = TransferService(StoreSession(store)).list_history()
    assert [t["id"] for t in history] == [2, 1]
    assert [t["quantity"] for t in history] == [10, 5]
    assert _quantity(stocked, 7, 1) == 35


def test_failed_history_write_leaves_stock_unmoved(db, stocked, monkeypatch):
    real_replace = os.replace
    renamed = []

    def replace_then_fail(src, dst):
        renamed.append(dst)
        if len(renamed) == 2:
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", replace_then_fail)
    with pytest.raises(StorageException):
        TransferService(db).transfer(_request())

    stocked.cache.clear()
    assert _quantity(stocked, 7, 1) == 50
    assert _quantity(stocked, 7, 2) is None
    assert stocked.load_all("transfers") == []


def test_transfer_logs_event_fields(db, stocked, caplog):
    with caplog.at_level(logging.INFO, logger="stockkeeper"):
        TransferService(db).transfer(_request())

    (event,) = [r for r in caplog.records if r.getMessage() == "transfer_completed"]
    assert event.transfer_id == 1
    assert (event.from_warehouse_id, event.to_warehouse_id) == (1, 2)
    assert event.quantity == 30
