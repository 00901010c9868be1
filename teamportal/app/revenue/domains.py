import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field, PlainSerializer, field_validator

from teamportal.app.revenue.constants import (
    EXPECTED_REVENUE_PK_ABBREV,
    MAX_TARGET_YEAR,
    MIN_TARGET_YEAR,
    NOTE_MAX_LENGTH,
    REVENUE_ENTRY_PK_ABBREV,
)
from teamportal.common.domain import BaseDomain
from teamportal.common.nanoid import NanoId, NanoIdType

# Stored as NUMERIC(12, 2), sent to clients as a plain JSON number
Money = Annotated[
    Decimal,
    Field(max_digits=12, decimal_places=2),
    PlainSerializer(lambda value: float(value), return_type=float, when_used='json'),
]
Year = Annotated[int, Field(ge=MIN_TARGET_YEAR, le=MAX_TARGET_YEAR)]
Month = Annotated[int, Field(ge=1, le=12)]


class _NoteInput(BaseDomain):
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)

    @field_validator('note')
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class RevenueEntryCreate(_NoteInput):
    # Negative amounts are deductions e.g. server costs
    date: datetime.date
    amount: Money


class RevenueEntryUpdate(_NoteInput):
    date: Optional[datetime.date] = None
    amount: Optional[Money] = None


class RevenueEntryInsert(BaseDomain):
    id: Optional[NanoIdType] = Field(default_factory=lambda: NanoId.gen(abbrev=REVENUE_ENTRY_PK_ABBREV))
    user_id: NanoIdType
    date: datetime.date
    amount: Decimal
    note: Optional[str] = None


class RevenueEntryRead(BaseDomain):
    id: NanoIdType
    user_id: NanoIdType
    date: datetime.date
    amount: Money
    note: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    modified_at: Optional[datetime.datetime] = None


class ExpectedRevenueSet(BaseDomain):
    year: Year
    month: Month
    amount: Annotated[Money, Field(ge=0)]


class ExpectedRevenueInsert(BaseDomain):
    id: Optional[NanoIdType] = Field(default_factory=lambda: NanoId.gen(abbrev=EXPECTED_REVENUE_PK_ABBREV))
    user_id: NanoIdType
    year: int
    month: int
    amount: Decimal


class ExpectedRevenueRead(BaseDomain):
    id: NanoIdType
    user_id: NanoIdType
    year: int
    month: int
    amount: Money
    created_at: Optional[datetime.datetime] = None
    modified_at: Optional[datetime.datetime] = None


class ExpectedRevenueMonth(BaseDomain):
    """
    Target for one month, amount is null when none was set
    """

    year: int
    month: int
    amount: Optional[Money] = None
