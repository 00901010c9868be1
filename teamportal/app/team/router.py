from datetime import datetime

from fastapi import APIRouter, Depends

from teamportal.app.periods import APP_TIMEZONE, PeriodBounds, get_period_bounds
from teamportal.core.authentication import AdminUserGuard, AuthenticatedUser, authenticate_user
from teamportal.core.user import MemberRead, UserRead, UserService
from teamportal.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('/members', response_model=list[MemberRead])
def list_members(
    user: AuthenticatedUser = Depends(authenticate_user),
    user_service: UserService = Depends(UserService.factory),
) -> list[MemberRead]:
    """List every member, used for the team time sheets."""
    return user_service.list_member_entries()


@router.get('/periods', response_model=PeriodBounds)
def get_periods(
    as_of: datetime | None = None,
    user: AuthenticatedUser = Depends(authenticate_user),
) -> PeriodBounds:
    """Today, this week and this month boundaries in the app timezone."""
    return get_period_bounds(as_of, APP_TIMEZONE)


@read_only_route
@router.get('/users', response_model=list[UserRead])
def list_users(
    user: AuthenticatedUser = AdminUserGuard(),
    user_service: UserService = Depends(UserService.factory),
) -> list[UserRead]:
    """Every account including admins, with roles."""
    return user_service.list_users()
