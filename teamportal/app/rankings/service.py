from datetime import datetime

from teamportal.app.periods import APP_TIMEZONE, get_period_bounds, get_today
from teamportal.app.rankings.assembler import assemble_revenue_ranking, assemble_work_hours_ranking
from teamportal.app.rankings.domains import RevenueRankingEntry, WorkHoursRankingEntry
from teamportal.app.revenue.constants import MAX_TARGET_YEAR, MIN_TARGET_YEAR
from teamportal.app.revenue.service import RevenueService
from teamportal.app.time_blocks.constants import TimeBlockLabel
from teamportal.app.time_blocks.service import TimeBlockService
from teamportal.core.user import UserService


def resolve_ranking_month(year: int | None, month: int | None, today=None) -> tuple[int, int]:
    """
    An explicit month is only honoured when both parts are given and valid,
    anything else falls back to the current month in the app timezone.
    """
    if (
        year is not None
        and month is not None
        and 1 <= month <= 12
        and MIN_TARGET_YEAR <= year <= MAX_TARGET_YEAR
    ):
        return year, month

    today = today or get_today(APP_TIMEZONE)
    return today.year, today.month


class RankingService:
    def __init__(
        self,
        user_service: UserService,
        time_block_service: TimeBlockService,
        revenue_service: RevenueService,
    ):
        self.user_service = user_service
        self.time_block_service = time_block_service
        self.revenue_service = revenue_service

    @classmethod
    def factory(cls) -> 'RankingService':
        return cls(
            user_service=UserService.factory(),
            time_block_service=TimeBlockService.factory(),
            revenue_service=RevenueService.factory(),
        )

    def get_work_hours_ranking(self, as_of: datetime | None = None) -> list[WorkHoursRankingEntry]:
        """Members ranked by all time Work hours, with today, week and month columns."""
        bounds = get_period_bounds(as_of, APP_TIMEZONE)
        members = self.user_service.list_members()
        time_blocks = self.time_block_service.list_time_blocks_for_users(
            [member.id for member in members],
            labels=[TimeBlockLabel.WORK.value],
        )
        return assemble_work_hours_ranking(members, time_blocks, bounds)

    def get_revenue_ranking(self, year: int | None = None, month: int | None = None) -> list[RevenueRankingEntry]:
        """Members ranked by all time revenue, with the chosen month and its target."""
        year, month = resolve_ranking_month(year, month)
        members = self.user_service.list_members()
        member_ids = [member.id for member in members]
        entries = self.revenue_service.list_entries_for_users(member_ids)
        expected_by_user = self.revenue_service.list_expected_for_month(member_ids, year, month)
        return assemble_revenue_ranking(members, entries, expected_by_user, year, month)
