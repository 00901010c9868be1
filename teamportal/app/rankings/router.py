from datetime import datetime

from fastapi import APIRouter, Depends

from teamportal.app.rankings.domains import RevenueRankingEntry, WorkHoursRankingEntry
from teamportal.app.rankings.service import RankingService
from teamportal.core.authentication import AuthenticatedUser, authenticate_user
from teamportal.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('/work-hours', response_model=list[WorkHoursRankingEntry])
def get_work_hours_ranking(
    as_of: datetime | None = None,
    user: AuthenticatedUser = Depends(authenticate_user),
    ranking_service: RankingService = Depends(RankingService.factory),
) -> list[WorkHoursRankingEntry]:
    """Work hours of every member, highest all time total first."""
    return ranking_service.get_work_hours_ranking(as_of=as_of)


@read_only_route
@router.get('/revenue', response_model=list[RevenueRankingEntry])
def get_revenue_ranking(
    year: int | None = None,
    month: int | None = None,
    user: AuthenticatedUser = Depends(authenticate_user),
    ranking_service: RankingService = Depends(RankingService.factory),
) -> list[RevenueRankingEntry]:
    """Revenue of every member, highest all time total first. Defaults to the current month."""
    return ranking_service.get_revenue_ranking(year=year, month=month)
