from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from teamportal.app.rankings import RankingService
from teamportal.app.revenue import RevenueEntryCreate, RevenueService
from teamportal.app.time_blocks import TimeBlockCreate, TimeBlockLabel, TimeBlockService

UTC = timezone.utc


@pytest.fixture
def ranking_service() -> RankingService:
    return RankingService.factory()


def test_work_hours_ranking(ranking_service, member, other_member, admin):
    time_blocks = TimeBlockService.factory()
    time_blocks.create_time_block(
        member.id, TimeBlockCreate(start_at=datetime(2024, 3, 13, 0, tzinfo=UTC), end_at=datetime(2024, 3, 13, 2, tzinfo=UTC))
    )
    time_blocks.create_time_block(
        other_member.id,
        TimeBlockCreate(start_at=datetime(2024, 3, 13, 0, tzinfo=UTC), end_at=datetime(2024, 3, 13, 5, tzinfo=UTC)),
    )
    time_blocks.create_time_block(
        other_member.id,
        TimeBlockCreate(
            start_at=datetime(2024, 3, 13, 5, tzinfo=UTC),
            end_at=datetime(2024, 3, 13, 9, tzinfo=UTC),
            label=TimeBlockLabel.SLEEP,
        ),
    )
    time_blocks.create_time_block(
        admin.id, TimeBlockCreate(start_at=datetime(2024, 3, 13, 0, tzinfo=UTC), end_at=datetime(2024, 3, 13, 9, tzinfo=UTC))
    )

    ranking = ranking_service.get_work_hours_ranking(as_of=datetime(2024, 3, 13, 3, tzinfo=UTC))
    ours = [entry for entry in ranking if entry.user_id in {member.id, other_member.id, admin.id}]

    assert [entry.user_id for entry in ours] == [other_member.id, member.id]
    assert ours[0].total_hours == 5
    assert ours[0].daily_hours == 5
    assert ours[1].weekly_hours == 2


def test_revenue_ranking(ranking_service, member, other_member):
    revenue = RevenueService.factory()
    revenue.create_entry(member.id, RevenueEntryCreate(date=date(2024, 3, 2), amount=Decimal('100')))
    revenue.create_entry(member.id, RevenueEntryCreate(date=date(2024, 2, 2), amount=Decimal('400')))
    revenue.create_entry(other_member.id, RevenueEntryCreate(date=date(2024, 3, 5), amount=Decimal('300')))
    revenue.set_expected(member.id, 2024, 3, Decimal('1000'))

    ranking = ranking_service.get_revenue_ranking(year=2024, month=3)
    ours = [entry for entry in ranking if entry.user_id in {member.id, other_member.id}]

    assert [entry.user_id for entry in ours] == [member.id, other_member.id]
    assert ours[0].monthly_revenue == Decimal('100.00')
    assert ours[0].total_revenue == Decimal('500.00')
    assert ours[0].expected_revenue == Decimal('1000.00')
    assert ours[1].expected_revenue is None
