"""
Statistics endpoint.

Computes the statistics screen for the caller's most recent training logs.
"""

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.core.config import settings
from app.db.session import get_db
from app.schemas.statistics import StatisticsSummary, TimeWindow, TrainingTypeFilter
from app.scoring.statistics import StatisticsConfig
from app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("", summary="Statistics for a time window and training type.", response_model=StatisticsSummary, )
def get_statistics(window: TimeWindow = Query(TimeWindow.WEEK, description="WEEK, MONTH or YEAR"),
                   type: TrainingTypeFilter = Query(TrainingTypeFilter.ALL, description="ALL, GI or NO-GI"),
                   db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    config = StatisticsConfig(top_n=settings.STATS_TOP_N, expanded_top_n=settings.STATS_EXPANDED_TOP_N)
    service = StatisticsService(db, max_logs=settings.STATS_MAX_LOGS, config=config)
    return service.get_statistics(user_id, window, type)
