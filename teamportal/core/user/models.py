from sqlalchemy import ForeignKey, Index, String, func, text
from sqlalchemy.ext.declarative import declared_attr
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamportal.common.model import BaseModel
from teamportal.core.user.constants import USER_PK_ABBREV, UserRoleEnum
from teamportal.core.user.domains import UserCreate, UserRead


class User(BaseModel[UserRead, UserCreate]):
    email: Mapped[str] = mapped_column(String(length=320), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(length=200), nullable=True)
    role: Mapped[UserRoleEnum] = mapped_column(
        UserRoleEnum.as_column_type('userrole'),
        nullable=False,
        server_default=UserRoleEnum.MEMBER.value,
    )

    __pk_abbrev__ = USER_PK_ABBREV
    __read_domain__ = UserRead
    __create_domain__ = UserCreate

    __table_args__ = (Index('idx_user_email_lower', func.lower(text('email')), unique=True),)


class HasUser:
    """
    Mixin for user relationships in other domains
    """

    user_id: Mapped[str] = mapped_column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False)

    @declared_attr
    def user(self) -> Mapped['User']:
        return relationship('User')
