import os

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy.exc import OperationalError

from teamportal import settings


@pytest.fixture(scope='session', autouse=True)
def migrated_database():
    """
    Integration tests run against a real postgres brought up to the latest
    migration. They are skipped when no database is reachable.
    """
    from teamportal.network.database.session import _rw_engine

    try:
        with _rw_engine.connect():
            pass
    except OperationalError as e:
        pytest.skip(f'database {settings.DB_NAME} is not reachable: {e}')

    alembic_config = Config()
    alembic_config.set_main_option('script_location', os.path.join(settings.BASE_DIR, 'migrations'))
    command.upgrade(alembic_config, 'head')
