from teamportal.core.user.constants import UserRoleEnum
from teamportal.core.user.domains import MemberRead, UserCreate, UserRead, UserUpdate
from teamportal.core.user.exceptions import UserNotFound
from teamportal.core.user.models import HasUser, User
from teamportal.core.user.service import UserService

__all__ = [
    'HasUser',
    'MemberRead',
    'User',
    'UserCreate',
    'UserRead',
    'UserRoleEnum',
    'UserUpdate',
    'UserNotFound',
    'UserService',
]
