import datetime

from fastapi import APIRouter, Depends, Query, Response, status

from teamportal.app.revenue.constants import MAX_TARGET_YEAR, MIN_TARGET_YEAR
from teamportal.app.revenue.domains import (
    ExpectedRevenueMonth,
    ExpectedRevenueRead,
    ExpectedRevenueSet,
    RevenueEntryCreate,
    RevenueEntryRead,
    RevenueEntryUpdate,
)
from teamportal.app.revenue.exceptions import RevenueEntryNotFound, RevenueInputInvalid
from teamportal.app.revenue.service import RevenueService
from teamportal.common.exceptions import APIException
from teamportal.core.authentication import AuthenticatedUser, authenticate_user
from teamportal.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('/entries', response_model=list[RevenueEntryRead])
def list_revenue_entries(
    date_from: datetime.date = Query(alias='from'),
    date_to: datetime.date = Query(alias='to'),
    user_id: str | None = Query(default=None, alias='userId'),
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> list[RevenueEntryRead]:
    """List revenue entries dated within [from, to]. Only admins may pass userId."""
    target_user_id = user_id if (user.is_admin and user_id) else user.id
    return revenue_service.list_entries(target_user_id, date_from=date_from, date_to=date_to)


@router.post('/entries', response_model=RevenueEntryRead, status_code=status.HTTP_201_CREATED)
def create_revenue_entry(
    entry: RevenueEntryCreate,
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> RevenueEntryRead:
    return revenue_service.create_entry(user_id=user.id, entry=entry)


@router.patch('/entries/{entry_id}', response_model=RevenueEntryRead)
def update_revenue_entry(
    entry_id: str,
    entry: RevenueEntryUpdate,
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> RevenueEntryRead:
    try:
        return revenue_service.update_entry(
            id=entry_id, user_id=user.id, entry_update=entry, is_admin=user.is_admin
        )
    except (RevenueEntryNotFound, RevenueInputInvalid) as e:
        raise APIException.from_internal(e)


@router.delete('/entries/{entry_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_revenue_entry(
    entry_id: str,
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> Response:
    try:
        revenue_service.delete_entry(id=entry_id, user_id=user.id, is_admin=user.is_admin)
    except RevenueEntryNotFound as e:
        raise APIException.from_internal(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@read_only_route
@router.get('/expected', response_model=ExpectedRevenueMonth)
def get_expected_revenue(
    year: int = Query(ge=MIN_TARGET_YEAR, le=MAX_TARGET_YEAR),
    month: int = Query(ge=1, le=12),
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> ExpectedRevenueMonth:
    return revenue_service.get_expected_month(user_id=user.id, year=year, month=month)


@router.put('/expected', response_model=ExpectedRevenueRead)
def set_expected_revenue(
    expected: ExpectedRevenueSet,
    user: AuthenticatedUser = Depends(authenticate_user),
    revenue_service: RevenueService = Depends(RevenueService.factory),
) -> ExpectedRevenueRead:
    return revenue_service.set_expected(
        user_id=user.id, year=expected.year, month=expected.month, amount=expected.amount
    )
