from teamportal.common.exceptions import ResourceNotFound


class UserNotFound(ResourceNotFound):
    default_detail = 'User not found.'
