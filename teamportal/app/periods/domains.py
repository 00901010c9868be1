from datetime import datetime

from pydantic import model_validator

from teamportal.common.domain import BaseDomain


class Period(BaseDomain):
    """
    Half open span of absolute time, start inclusive and end exclusive
    """

    start: datetime
    end: datetime

    @model_validator(mode='after')
    def validate_span(self):
        if self.end <= self.start:
            raise ValueError('period end must be after start')
        return self

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


class PeriodBounds(BaseDomain):
    today: Period
    week: Period
    month: Period

    def as_dict(self) -> dict[str, Period]:
        return {'today': self.today, 'week': self.week, 'month': self.month}
