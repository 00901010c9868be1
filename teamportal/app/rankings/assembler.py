"""
Builds the ranking tables from already fetched rows. Every member of the
roster gets exactly one entry, members without any activity rank with zeros.
"""

import datetime
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from teamportal.app.periods.domains import PeriodBounds
from teamportal.app.rankings.domains import RevenueRankingEntry, WorkHoursRankingEntry
from teamportal.app.revenue.domains import RevenueEntryRead
from teamportal.app.time_blocks.aggregation import aggregate_periods, filter_by_label, to_hours, total_duration
from teamportal.app.time_blocks.constants import TimeBlockLabel
from teamportal.app.time_blocks.domains import TimeBlockRead
from teamportal.core.user.domains import UserRead

CENT = Decimal('0.01')


def to_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def assemble_work_hours_ranking(
    members: list[UserRead],
    time_blocks: Iterable[TimeBlockRead],
    bounds: PeriodBounds,
) -> list[WorkHoursRankingEntry]:
    blocks_by_user: dict[str, list[TimeBlockRead]] = defaultdict(list)
    for block in filter_by_label(time_blocks, TimeBlockLabel.WORK):
        blocks_by_user[block.user_id].append(block)

    periods = bounds.as_dict()
    ranked = []
    for member in members:
        blocks = blocks_by_user.get(member.id, [])
        durations = aggregate_periods(blocks, periods)
        total = total_duration(blocks)
        entry = WorkHoursRankingEntry(
            user_id=member.id,
            display_name=member.display_label,
            email=member.email,
            daily_hours=to_hours(durations['today']),
            weekly_hours=to_hours(durations['week']),
            monthly_hours=to_hours(durations['month']),
            total_hours=to_hours(total),
        )
        ranked.append((total, entry))

    # sorted() is stable so ties keep roster order
    ranked = sorted(ranked, key=lambda pair: pair[0], reverse=True)
    return [entry for _, entry in ranked]


def assemble_revenue_ranking(
    members: list[UserRead],
    entries: Iterable[RevenueEntryRead],
    expected_by_user: Mapping[str, Decimal],
    year: int,
    month: int,
) -> list[RevenueRankingEntry]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    monthly: dict[str, Decimal] = defaultdict(Decimal)
    for entry in entries:
        totals[entry.user_id] += entry.amount
        if _in_month(entry.date, year, month):
            monthly[entry.user_id] += entry.amount

    ranked = []
    for member in members:
        total = totals.get(member.id, Decimal(0))
        expected = expected_by_user.get(member.id)
        ranking_entry = RevenueRankingEntry(
            user_id=member.id,
            display_name=member.display_label,
            email=member.email,
            monthly_revenue=to_money(monthly.get(member.id, Decimal(0))),
            total_revenue=to_money(total),
            expected_revenue=to_money(expected) if expected is not None else None,
        )
        ranked.append((total, ranking_entry))

    ranked = sorted(ranked, key=lambda pair: pair[0], reverse=True)
    return [ranking_entry for _, ranking_entry in ranked]


def _in_month(entry_date: datetime.date, year: int, month: int) -> bool:
    return entry_date.year == year and entry_date.month == month
