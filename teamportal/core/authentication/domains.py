from typing import Optional

from pydantic import Field

from teamportal.common.domain import BaseDomain, BaseDomainConfig
from teamportal.common.nanoid import NanoIdType
from teamportal.core.user.constants import UserRoleEnum


class Token(BaseDomain):
    access_token: str
    token_type: str = 'bearer'


class TokenContent(BaseDomain):
    """
    Decoded claims of an access token
    """

    # Identity providers may add claims of their own
    model_config = {**BaseDomainConfig, 'extra': 'ignore'}

    sub: NanoIdType
    role: UserRoleEnum = UserRoleEnum.MEMBER
    exp: int
    nbf: Optional[int] = None
    jti: Optional[str] = None


class AuthenticatedUser(BaseDomain):
    id: NanoIdType
    role: UserRoleEnum = UserRoleEnum.MEMBER
    token: Optional[TokenContent] = Field(default=None, exclude=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN
