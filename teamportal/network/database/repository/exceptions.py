from sqlalchemy.exc import IntegrityError

from teamportal.common.exceptions import InternalException, ResourceNotFound

# SQLSTATE codes postgres attaches to constraint violations
FOREIGN_KEY_VIOLATION = '23503'
UNIQUE_VIOLATION = '23505'
CHECK_VIOLATION = '23514'
EXCLUSION_VIOLATION = '23P01'


def get_violation_code(error: IntegrityError) -> str | None:
    return getattr(error.orig, 'pgcode', None)


class RepositoryObjectNotFound(ResourceNotFound):
    """
    No row matched a get, or an update targeted a missing id
    """

    default_detail = 'Record not found.'


class MultipleRepositoryObjectsFound(InternalException):
    """
    A get matched more than one row
    """

    default_detail = 'Multiple records matched a single lookup.'


class PreventingModelTruncation(InternalException):
    """
    Raised instead of running a delete that has no effective filter
    """

    default_detail = 'Refusing to delete without a filter.'
