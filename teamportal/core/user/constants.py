from teamportal.common.enum import BaseEnum

USER_PK_ABBREV = 'user'


class UserRoleEnum(BaseEnum):
    MEMBER = 'member'
    ADMIN = 'admin'
