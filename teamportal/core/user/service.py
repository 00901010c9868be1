from loguru import logger
from sqlalchemy import func

from teamportal.common.nanoid import NanoIdType
from teamportal.core.user.constants import UserRoleEnum
from teamportal.core.user.domains import MemberRead, UserCreate, UserRead, UserUpdate
from teamportal.core.user.exceptions import UserNotFound
from teamportal.core.user.models import User
from teamportal.network.database.repository.exceptions import RepositoryObjectNotFound


class UserService:
    @classmethod
    def factory(cls) -> 'UserService':
        return cls()

    def get_user_for_id(self, user_id: NanoIdType) -> UserRead:
        try:
            return User.get(id=user_id)
        except RepositoryObjectNotFound:
            raise UserNotFound(message=f'User not found with id: {user_id}')

    def lock_user_for_update(self, user_id: NanoIdType) -> UserRead:
        """
        Take the row lock that serializes writes owned by this user
        """
        try:
            return User.get_for_update(id=user_id)
        except RepositoryObjectNotFound:
            raise UserNotFound(message=f'User not found with id: {user_id}')

    def get_user_for_email(self, email: str) -> UserRead:
        try:
            return User.get(func.lower(User.email) == func.lower(email))
        except RepositoryObjectNotFound:
            raise UserNotFound(message=f'User not found with email: {email}')

    def get_user_for_email_or_none(self, email: str) -> UserRead | None:
        return User.get_or_none(func.lower(User.email) == func.lower(email))

    def create_user(self, user: UserCreate) -> UserRead:
        created = User.create(user)
        logger.info('created user', user_id=created.id, role=str(created.role))
        return created

    def get_or_create_user(self, user_create: UserCreate) -> tuple[UserRead, bool]:
        existing_user = self.get_user_for_email_or_none(user_create.email)
        if existing_user:
            return existing_user, False

        return self.create_user(user_create), True

    def update_user(self, id: NanoIdType, user_update: UserUpdate) -> UserRead:
        return User.update(id=id, **user_update.to_dict())

    def list_users(self) -> list[UserRead]:
        return User.list(ordering=[User.display_name.asc().nulls_last(), User.email.asc()])

    def list_members(self) -> list[UserRead]:
        """
        The team roster. Admins are never ranked so only members are returned,
        named members first alphabetically then the rest by email.
        """
        return User.list(
            User.role == UserRoleEnum.MEMBER,
            ordering=[User.display_name.asc().nulls_last(), User.email.asc()],
        )

    def list_member_entries(self) -> list[MemberRead]:
        return [MemberRead.from_user(user) for user in self.list_members()]
