from teamportal.app.revenue.domains import (
    ExpectedRevenueMonth,
    ExpectedRevenueRead,
    ExpectedRevenueSet,
    RevenueEntryCreate,
    RevenueEntryRead,
    RevenueEntryUpdate,
)
from teamportal.app.revenue.exceptions import RevenueEntryNotFound, RevenueInputInvalid
from teamportal.app.revenue.models import ExpectedRevenue, RevenueEntry
from teamportal.app.revenue.service import RevenueService

__all__ = [
    'ExpectedRevenue',
    'ExpectedRevenueMonth',
    'ExpectedRevenueRead',
    'ExpectedRevenueSet',
    'RevenueEntry',
    'RevenueEntryCreate',
    'RevenueEntryNotFound',
    'RevenueEntryRead',
    'RevenueEntryUpdate',
    'RevenueInputInvalid',
    'RevenueService',
]
