from fastapi import APIRouter, Depends

from stockkeeper.database import StoreSession, get_db
from stockkeeper.schemas.dashboard import DashboardSummary
from stockkeeper.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service(db: StoreSession = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(service: DashboardService = Depends(get_dashboard_service)):
    return service.get_summary()
