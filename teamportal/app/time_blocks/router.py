from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status

from teamportal.app.time_blocks.domains import TimeBlockCreate, TimeBlockRead, TimeBlockUpdate
from teamportal.app.time_blocks.exceptions import TimeBlockInvalid, TimeBlockNotFound, TimeBlockOverlap
from teamportal.app.time_blocks.service import TimeBlockService
from teamportal.common.exceptions import APIException
from teamportal.core.authentication import AuthenticatedUser, authenticate_user
from teamportal.core.user import UserNotFound, UserRoleEnum, UserService
from teamportal.network.database.decorator import read_only_route

router = APIRouter()


def resolve_viewable_user_id(
    user: AuthenticatedUser,
    requested_user_id: str | None,
    user_service: UserService,
) -> str:
    """
    Admins can view anyone. Members can view other members' time sheets but
    never an admin's, in which case they get their own.
    """
    if not requested_user_id or requested_user_id == user.id:
        return user.id
    if user.is_admin:
        return requested_user_id

    try:
        target = user_service.get_user_for_id(requested_user_id)
    except UserNotFound:
        return user.id

    return target.id if target.role == UserRoleEnum.MEMBER else user.id


@read_only_route
@router.get('', response_model=list[TimeBlockRead])
def list_time_blocks(
    range_start: datetime = Query(alias='from'),
    range_end: datetime = Query(alias='to'),
    user_id: str | None = Query(default=None, alias='userId'),
    user: AuthenticatedUser = Depends(authenticate_user),
    user_service: UserService = Depends(UserService.factory),
    time_block_service: TimeBlockService = Depends(TimeBlockService.factory),
) -> list[TimeBlockRead]:
    """List time blocks intersecting [from, to), ordered by start."""
    target_user_id = resolve_viewable_user_id(user, user_id, user_service)
    return time_block_service.list_time_blocks(target_user_id, range_start=range_start, range_end=range_end)


@router.post('', response_model=TimeBlockRead, status_code=status.HTTP_201_CREATED)
def create_time_block(
    time_block: TimeBlockCreate,
    user: AuthenticatedUser = Depends(authenticate_user),
    time_block_service: TimeBlockService = Depends(TimeBlockService.factory),
) -> TimeBlockRead:
    try:
        return time_block_service.create_time_block(user_id=user.id, time_block=time_block)
    except (TimeBlockInvalid, TimeBlockOverlap, UserNotFound) as e:
        raise APIException.from_internal(e)


@router.patch('/{time_block_id}', response_model=TimeBlockRead)
def update_time_block(
    time_block_id: str,
    time_block: TimeBlockUpdate,
    user: AuthenticatedUser = Depends(authenticate_user),
    time_block_service: TimeBlockService = Depends(TimeBlockService.factory),
) -> TimeBlockRead:
    try:
        return time_block_service.update_time_block(id=time_block_id, user_id=user.id, time_block=time_block)
    except (TimeBlockInvalid, TimeBlockNotFound, TimeBlockOverlap, UserNotFound) as e:
        raise APIException.from_internal(e)


@router.delete('/{time_block_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_time_block(
    time_block_id: str,
    user: AuthenticatedUser = Depends(authenticate_user),
    time_block_service: TimeBlockService = Depends(TimeBlockService.factory),
) -> Response:
    try:
        time_block_service.delete_time_block(id=time_block_id, user_id=user.id)
    except TimeBlockNotFound as e:
        raise APIException.from_internal(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
