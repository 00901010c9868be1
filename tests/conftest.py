import os
import sys

from sqlalchemy.orm import Session

# Test Environment Overrides will override .env files
# THESE MUST BE IMPORTED BEFORE ANYTHING
EXPECTED_SECRET_KEY = 'test-secret-key-long-enough-for-hs256'
os.environ.setdefault('SECRET_KEY', EXPECTED_SECRET_KEY)
os.environ.setdefault('ENVIRONMENT', 'testing')
os.environ.setdefault('COMPANY_NAME', 'TestCompany')
os.environ.setdefault('DB_NAME', 'teamportal-test')
os.environ.setdefault('DB_USER', 'teamportal')
os.environ.setdefault('ATOMIC_REQUESTS', 'False')
os.environ.setdefault('APP_UTC_OFFSET_HOURS', '9')
os.environ.setdefault('USE_MOCK_SENTRY_CLIENT', 'True')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from teamportal import setup

setup.run()

import pytest

from teamportal.common import context

# Add fixtures here
pytest_plugins = [
    'tests.factories.core.user',
]

# ruff: noqa: E402
from teamportal import settings
from teamportal.core.user import UserRoleEnum, UserService
from teamportal.network.database.session import db as session_manager

# When teamportal files are imported before the above patching, tests will use
# incorrect database settings as well as non mocked services.
if settings.SECRET_KEY != EXPECTED_SECRET_KEY:
    raise ValueError(
        'Patching of environment variables failed.\n'
        'This will cause unexpected test failures'
        'Check all teamportal imports are delayed until after patching.\n'
    )


@pytest.fixture(scope='function', autouse=True)
def db() -> Session:
    # This needs to be set first for fixtures to be able to create
    token = context.initialize(
        user_type=context.AppContextUserType.SYSTEM.value,
        user_id='user-system',
        breadcrumb='testing',
    )

    with session_manager(commit_on_success=False):
        session = session_manager.session

        # Patch commit() to prevent accidental commits in tests
        # This allows production code to use db.session.commit() naturally
        # without breaking test rollbacks
        def no_op_commit():
            # In tests, flush changes but don't actually commit
            # This makes the changes visible within the transaction
            # but keeps them rollbackable
            session.flush()

        session.commit = no_op_commit

        yield session_manager.session

    context.reset(token)


@pytest.fixture(scope='function')
def member(user_factory):
    return UserService.factory().create_user(user_factory.build(display_name='Member One'))


@pytest.fixture(scope='function')
def other_member(user_factory):
    return UserService.factory().create_user(user_factory.build(display_name='Member Two'))


@pytest.fixture(scope='function')
def admin(user_factory):
    return UserService.factory().create_user(user_factory.build(display_name='Admin', role=UserRoleEnum.ADMIN))
