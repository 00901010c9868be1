from datetime import datetime, timedelta, timezone

import pytest

from teamportal.app.periods import Period
from teamportal.app.time_blocks.aggregation import (
    ZERO,
    aggregate_periods,
    clipped_duration,
    filter_by_label,
    intervals_overlap,
    sum_clipped_durations,
    to_hours,
    total_duration,
)
from teamportal.app.time_blocks.constants import TimeBlockLabel
from teamportal.app.time_blocks.domains import TimeBlockRead


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def block(start_at: datetime, end_at: datetime, label: TimeBlockLabel = TimeBlockLabel.WORK, user_id='user-1'):
    return TimeBlockRead(
        id=f'tblk-{start_at.isoformat()}',
        user_id=user_id,
        start_at=start_at,
        end_at=end_at,
        label=label,
    )


# Monday March 4th 2024 to the following Monday
WEEK = Period(start=utc(2024, 3, 4), end=utc(2024, 3, 11))


class TestIntervalsOverlap:
    def test_touching_intervals_do_not_overlap(self):
        assert not intervals_overlap(utc(2024, 3, 4, 9), utc(2024, 3, 4, 10), utc(2024, 3, 4, 10), utc(2024, 3, 4, 11))

    def test_nested_intervals_overlap(self):
        assert intervals_overlap(utc(2024, 3, 4, 9), utc(2024, 3, 4, 17), utc(2024, 3, 4, 10), utc(2024, 3, 4, 11))


class TestClippedDuration:
    def test_block_straddling_period_start_is_clipped(self):
        # Sunday 22:00 to Monday 02:00 only counts the Monday part
        straddling = block(utc(2024, 3, 3, 22), utc(2024, 3, 4, 2))
        assert clipped_duration(straddling, WEEK) == timedelta(hours=2)

    def test_block_outside_period_counts_nothing(self):
        outside = block(utc(2024, 3, 1, 9), utc(2024, 3, 1, 17))
        assert clipped_duration(outside, WEEK) == ZERO

    def test_block_inside_period_counts_fully(self):
        inside = block(utc(2024, 3, 5, 9), utc(2024, 3, 5, 17, 30))
        assert clipped_duration(inside, WEEK) == timedelta(hours=8, minutes=30)

    def test_block_ending_at_period_start_counts_nothing(self):
        touching = block(utc(2024, 3, 3, 20), utc(2024, 3, 4))
        assert clipped_duration(touching, WEEK) == ZERO

    def test_block_covering_period_is_capped(self):
        covering = block(utc(2024, 3, 1), utc(2024, 3, 20))
        assert clipped_duration(covering, WEEK) == timedelta(days=7)


class TestAggregation:
    def test_sum_of_clipped_durations(self):
        blocks = [
            block(utc(2024, 3, 3, 22), utc(2024, 3, 4, 2)),
            block(utc(2024, 3, 5, 9), utc(2024, 3, 5, 12)),
            block(utc(2024, 3, 12, 9), utc(2024, 3, 12, 12)),
        ]
        assert sum_clipped_durations(blocks, WEEK) == timedelta(hours=5)

    def test_empty_input_is_zero(self):
        assert sum_clipped_durations([], WEEK) == ZERO
        assert total_duration([]) == ZERO

    def test_aggregate_periods_accepts_a_generator(self):
        day = Period(start=utc(2024, 3, 5), end=utc(2024, 3, 6))
        blocks = (b for b in [block(utc(2024, 3, 5, 9), utc(2024, 3, 5, 12))])

        durations = aggregate_periods(blocks, {'today': day, 'week': WEEK})
        assert durations == {'today': timedelta(hours=3), 'week': timedelta(hours=3)}

    def test_aggregation_is_repeatable(self):
        blocks = [block(utc(2024, 3, 5, 9), utc(2024, 3, 5, 12))]
        assert aggregate_periods(blocks, {'week': WEEK}) == aggregate_periods(blocks, {'week': WEEK})

    def test_only_work_is_counted_after_filtering(self):
        blocks = [
            block(utc(2024, 3, 5, 9), utc(2024, 3, 5, 12)),
            block(utc(2024, 3, 5, 12), utc(2024, 3, 5, 13), label=TimeBlockLabel.IDLE),
            block(utc(2024, 3, 5, 0), utc(2024, 3, 5, 8), label=TimeBlockLabel.SLEEP),
        ]
        work = filter_by_label(blocks, TimeBlockLabel.WORK)
        assert sum_clipped_durations(work, WEEK) == timedelta(hours=3)

    def test_filter_by_label_accepts_strings(self):
        blocks = [block(utc(2024, 3, 5, 12), utc(2024, 3, 5, 13), label=TimeBlockLabel.IDLE)]
        assert filter_by_label(blocks, 'Idle') == blocks

    def test_unknown_label_is_rejected(self):
        with pytest.raises(ValueError):
            filter_by_label([], 'Lunch')


@pytest.mark.parametrize(
    'duration, expected',
    [
        (timedelta(hours=3), 3.0),
        (timedelta(minutes=20), 0.33),
        (timedelta(hours=1, minutes=45), 1.75),
        (ZERO, 0.0),
    ],
)
def test_to_hours(duration, expected):
    assert to_hours(duration) == expected
