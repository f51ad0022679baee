"""
Transfers Router — stock movement between warehouses and its history.
"""
from typing import List

from fastapi import APIRouter, Depends

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.transfer import TransferRecordResponse, TransferRequest, TransferResponse
from stockkeeper.services.transfer_service import TransferService

router = APIRouter(prefix="/transfers", tags=["Stock Transfers"])


def get_transfer_service(db: StoreSession = Depends(get_db)) -> TransferService:
    return TransferService(db)


@router.get("", response_model=List[TransferRecordResponse])
def list_transfers(service: TransferService = Depends(get_transfer_service)):
    return service.list_history()


@router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
):
    result = service.transfer(payload)
    return TransferResponse(
        message="Transfer successful.",
        transfer=result.transfer,
        updated_stock=result.updated_stock,
    )
