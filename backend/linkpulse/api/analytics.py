from fastapi import APIRouter, Depends, Query

from ..schemas.analytics import AnalyticsSummary
from ..services.analytics import summarize
from ..services.links import LinkService
from .deps import get_link_service

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsSummary)
async def get_analytics(
    days: int = Query(7, ge=1, le=90, description="Trailing window in days"),
    service: LinkService = Depends(get_link_service)
):
    """Combined daily clicks across all links for the trailing window"""
    return summarize(service.search(), window_days=days)
