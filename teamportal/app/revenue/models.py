import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from teamportal.app.revenue.constants import (
    EXPECTED_REVENUE_PK_ABBREV,
    MAX_TARGET_YEAR,
    MIN_TARGET_YEAR,
    NOTE_MAX_LENGTH,
    REVENUE_ENTRY_PK_ABBREV,
)
from teamportal.app.revenue.domains import (
    ExpectedRevenueInsert,
    ExpectedRevenueRead,
    RevenueEntryInsert,
    RevenueEntryRead,
)
from teamportal.common.model import BaseModel
from teamportal.core.user.models import HasUser


class RevenueEntry(HasUser, BaseModel[RevenueEntryRead, RevenueEntryInsert]):
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    note: Mapped[str | None] = mapped_column(String(length=NOTE_MAX_LENGTH), nullable=True)

    __pk_abbrev__ = REVENUE_ENTRY_PK_ABBREV
    __read_domain__ = RevenueEntryRead
    __create_domain__ = RevenueEntryInsert

    __table_args__ = (Index('idx_revenueentry_user_date', 'user_id', 'date'),)


class ExpectedRevenue(HasUser, BaseModel[ExpectedRevenueRead, ExpectedRevenueInsert]):
    """Monthly revenue target of a user."""

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __pk_abbrev__ = EXPECTED_REVENUE_PK_ABBREV
    __read_domain__ = ExpectedRevenueRead
    __create_domain__ = ExpectedRevenueInsert

    __table_args__ = (
        UniqueConstraint('user_id', 'year', 'month', name='uq_expectedrevenue_user_year_month'),
        CheckConstraint('month BETWEEN 1 AND 12', name='expectedrevenue_month_range'),
        CheckConstraint(f'year BETWEEN {MIN_TARGET_YEAR} AND {MAX_TARGET_YEAR}', name='expectedrevenue_year_range'),
        CheckConstraint('amount >= 0', name='expectedrevenue_amount_positive'),
    )
