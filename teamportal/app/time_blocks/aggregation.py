"""
Duration arithmetic over time blocks. Everything here is pure: callers fetch
the blocks and the periods, these functions only add up the overlap.
"""

from datetime import datetime, timedelta
from typing import Iterable, Mapping

from teamportal.app.periods.domains import Period
from teamportal.app.time_blocks.constants import TimeBlockLabel
from teamportal.app.time_blocks.domains import TimeBlockRead

ZERO = timedelta(0)
SECONDS_PER_HOUR = 3600


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """
    Half open [start, end) test, so a block ending at 10:00 does not overlap
    one starting at 10:00
    """
    return a_start < b_end and a_end > b_start


def clipped_duration(interval: TimeBlockRead, period: Period) -> timedelta:
    if not intervals_overlap(interval.start_at, interval.end_at, period.start, period.end):
        return ZERO

    return min(interval.end_at, period.end) - max(interval.start_at, period.start)


def sum_clipped_durations(intervals: Iterable[TimeBlockRead], period: Period) -> timedelta:
    return sum((clipped_duration(interval, period) for interval in intervals), ZERO)


def aggregate_periods(intervals: Iterable[TimeBlockRead], periods: Mapping[str, Period]) -> dict[str, timedelta]:
    intervals = list(intervals)
    return {name: sum_clipped_durations(intervals, period) for name, period in periods.items()}


def total_duration(intervals: Iterable[TimeBlockRead]) -> timedelta:
    return sum((interval.end_at - interval.start_at for interval in intervals), ZERO)


def filter_by_label(intervals: Iterable[TimeBlockRead], label: TimeBlockLabel | str) -> list[TimeBlockRead]:
    label = TimeBlockLabel(label)
    return [interval for interval in intervals if interval.label == label]


def to_hours(duration: timedelta) -> float:
    return round(duration.total_seconds() / SECONDS_PER_HOUR, 2)
