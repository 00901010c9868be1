from typing import Optional

from pydantic import EmailStr, Field, computed_field, model_validator

from teamportal.common.domain import BaseDomain
from teamportal.common.nanoid import NanoId, NanoIdType
from teamportal.core.user.constants import USER_PK_ABBREV, UserRoleEnum


class UserRead(BaseDomain):
    id: NanoIdType
    email: str
    display_name: str | None = None
    role: UserRoleEnum = UserRoleEnum.MEMBER

    @computed_field
    @property
    def display_label(self) -> str:
        return self.display_name or self.email

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN


class UserUpdate(BaseDomain):
    display_name: str | None = None

    @model_validator(mode='after')
    def return_type_validator(self):
        self.display_name = (self.display_name or '').strip() or None
        return self


class UserCreate(UserUpdate):
    id: Optional[NanoIdType] = Field(default_factory=lambda: NanoId.gen(abbrev=USER_PK_ABBREV))
    email: EmailStr
    role: UserRoleEnum = UserRoleEnum.MEMBER


class MemberRead(BaseDomain):
    """
    Roster entry as shown to other members
    """

    id: NanoIdType
    display_name: str
    email: str

    @classmethod
    def from_user(cls, user: UserRead) -> 'MemberRead':
        return cls(id=user.id, display_name=user.display_label, email=user.email)
