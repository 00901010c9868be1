from teamportal.app.periods.domains import Period, PeriodBounds
from teamportal.app.periods.service import (
    APP_TIMEZONE,
    get_day_bounds,
    get_month_bounds,
    get_period_bounds,
    get_today,
    get_week_bounds,
)

__all__ = [
    'APP_TIMEZONE',
    'Period',
    'PeriodBounds',
    'get_day_bounds',
    'get_month_bounds',
    'get_period_bounds',
    'get_today',
    'get_week_bounds',
]
