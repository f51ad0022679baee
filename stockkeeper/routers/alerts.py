"""
Alerts Router — low-stock alerts and the actions taken on them.
"""
from typing import List

from fastapi import APIRouter, Depends

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.alert import AlertActionRequest, AlertResponse, OrderHistoryEntryResponse
from stockkeeper.services.alert_service import AlertService

router = APIRouter(prefix="/alerts", tags=["Low Stock Alerts"])


def get_alert_service(db: StoreSession = Depends(get_db)) -> AlertService:
    return AlertService(db)


@router.get("", response_model=List[AlertResponse])
def list_alerts(service: AlertService = Depends(get_alert_service)):
    """Re-classify every stock line and return the current alert list."""
    return service.generate_alerts()


@router.post("/actions", response_model=List[AlertResponse])
def apply_alert_action(
    payload: AlertActionRequest,
    service: AlertService = Depends(get_alert_service),
):
    return service.apply_action(payload.id, payload.action_type)


@router.get("/order-history", response_model=List[OrderHistoryEntryResponse])
def list_order_history(service: AlertService = Depends(get_alert_service)):
    return service.list_order_history()
