import pytest
from fastapi.testclient import TestClient

from teamportal.core.user import UserRoleEnum
from tests.api.helpers import ADMIN_ID, MEMBER_ID, auth_headers


@pytest.fixture(scope='module')
def client() -> TestClient:
    from teamportal.network.http.server import server

    with TestClient(server) as c:
        yield c


@pytest.fixture(scope='function')
def member_headers() -> dict[str, str]:
    """
    Get headers authenticated as a member
    """
    return auth_headers(MEMBER_ID)


@pytest.fixture(scope='function')
def admin_headers() -> dict[str, str]:
    """
    Get headers authenticated as an admin
    """
    return auth_headers(ADMIN_ID, role=UserRoleEnum.ADMIN)
