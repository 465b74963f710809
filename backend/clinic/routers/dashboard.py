from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from clinic.database import get_db
from clinic.schemas.dashboard import DashboardStats
from clinic.services.stats_service import stats_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    day: Optional[date] = Query(None, alias="date", description="Caller's local date; defaults to the server's"),
    db: AsyncSession = Depends(get_db),
):
    return await stats_service.summary(db, today=day or date.today())
