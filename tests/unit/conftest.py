from unittest.mock import patch

import pytest

DB_ACCESS_ERROR = 'Unit tests run without a database, move this test under tests/integration'


@pytest.fixture(autouse=True)
def no_db_access():
    """
    Both engines refuse connections so pure logic stays pure
    """
    with (
        patch('teamportal.network.database.session._rw_engine.connect', side_effect=RuntimeError(DB_ACCESS_ERROR)),
        patch('teamportal.network.database.session._ro_engine.connect', side_effect=RuntimeError(DB_ACCESS_ERROR)),
    ):
        yield
