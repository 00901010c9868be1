from decimal import Decimal
from typing import Optional

from teamportal.app.revenue.domains import Money
from teamportal.common.domain import BaseDomain
from teamportal.common.nanoid import NanoIdType


class WorkHoursRankingEntry(BaseDomain):
    user_id: NanoIdType
    display_name: str
    email: str
    daily_hours: float = 0
    weekly_hours: float = 0
    monthly_hours: float = 0
    total_hours: float = 0


class RevenueRankingEntry(BaseDomain):
    user_id: NanoIdType
    display_name: str
    email: str
    monthly_revenue: Money = Decimal('0.00')
    total_revenue: Money = Decimal('0.00')
    expected_revenue: Optional[Money] = None
