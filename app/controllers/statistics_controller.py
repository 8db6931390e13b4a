# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: assignment statistics."""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_statistics_service
from app.schemas.reviewer import StatisticsResponse
from app.services.statistics_service import StatisticsService

router = APIRouter(tags=["Statistics"])


@router.get("/statistics", response_model=StatisticsResponse)
def get_statistics(service: StatisticsService = Depends(get_statistics_service)):
    return service.get_statistics()
