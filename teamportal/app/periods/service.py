from datetime import date, datetime, timedelta, timezone, tzinfo

from teamportal import settings
from teamportal.app.periods.domains import Period, PeriodBounds

# Timezone for day boundaries (when "today" starts/ends)
APP_TIMEZONE = timezone(timedelta(hours=settings.APP_UTC_OFFSET_HOURS))


def _local_midnight(for_date: date, tz: tzinfo) -> datetime:
    """
    Midnight of a calendar date in tz, as a UTC instant
    """
    return datetime(for_date.year, for_date.month, for_date.day, tzinfo=tz).astimezone(timezone.utc)


def _to_local(reference: datetime, tz: tzinfo) -> datetime:
    # Naive datetimes are assumed to already be UTC
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    return reference.astimezone(tz)


def get_today(tz: tzinfo = APP_TIMEZONE, now: datetime | None = None) -> date:
    """Get today's date in the app's configured timezone."""
    return _to_local(now or datetime.now(timezone.utc), tz).date()


def get_day_bounds(for_date: date, tz: tzinfo = APP_TIMEZONE) -> Period:
    """
    Get the UTC bounds for a local day.
    Start is inclusive and end is exclusive.
    """
    return Period(
        start=_local_midnight(for_date, tz),
        end=_local_midnight(for_date + timedelta(days=1), tz),
    )


def get_week_bounds(for_date: date, tz: tzinfo = APP_TIMEZONE) -> Period:
    """
    Weeks start on Sunday. Python counts Monday as weekday 0.
    """
    week_start = for_date - timedelta(days=(for_date.weekday() + 1) % 7)
    return Period(
        start=_local_midnight(week_start, tz),
        end=_local_midnight(week_start + timedelta(days=7), tz),
    )


def get_month_bounds(year: int, month: int, tz: tzinfo = APP_TIMEZONE) -> Period:
    if not 1 <= month <= 12:
        raise ValueError(f'month must be between 1 and 12, got {month}')

    month_start = date(year, month, 1)
    if month == 12:
        next_month_start = date(year + 1, 1, 1)
    else:
        next_month_start = date(year, month + 1, 1)

    return Period(
        start=_local_midnight(month_start, tz),
        end=_local_midnight(next_month_start, tz),
    )


def get_period_bounds(reference: datetime | None = None, tz: tzinfo = APP_TIMEZONE) -> PeriodBounds:
    """
    Today, this week and this month containing the reference instant
    (defaults to now) as absolute [start, end) spans.
    """
    local_date = get_today(tz, now=reference)

    return PeriodBounds(
        today=get_day_bounds(local_date, tz),
        week=get_week_bounds(local_date, tz),
        month=get_month_bounds(local_date.year, local_date.month, tz),
    )
