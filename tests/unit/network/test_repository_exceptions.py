from sqlalchemy.exc import IntegrityError

from teamportal.network.database.repository.exceptions import (
    CHECK_VIOLATION,
    EXCLUSION_VIOLATION,
    RepositoryObjectNotFound,
    get_violation_code,
)


class FakeDriverError(Exception):
    def __init__(self, pgcode):
        super().__init__('constraint violated')
        self.pgcode = pgcode


def test_violation_code_is_read_from_driver_error():
    error = IntegrityError('INSERT ...', {}, FakeDriverError(EXCLUSION_VIOLATION))
    assert get_violation_code(error) == EXCLUSION_VIOLATION

    error = IntegrityError('UPDATE ...', {}, FakeDriverError(CHECK_VIOLATION))
    assert get_violation_code(error) == CHECK_VIOLATION


def test_violation_code_missing():
    error = IntegrityError('INSERT ...', {}, Exception('no code'))
    assert get_violation_code(error) is None


def test_not_found_maps_to_404():
    error = RepositoryObjectNotFound()
    assert error.status_code == 404
    assert error.message == 'Record not found.'
