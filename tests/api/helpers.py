from contextlib import contextmanager
from typing import Callable, Dict

from teamportal.core.authentication import AuthenticationService
from teamportal.core.user import UserRoleEnum

MEMBER_ID = 'user-member'
ADMIN_ID = 'user-admin'


@contextmanager
def override_dependencies(dependency_overrides: Dict[Callable, Callable]):
    """
    Swap service factories for the duration of a test, e.g. to serve a
    router from an in-memory fake instead of the database.
    """
    from teamportal.network.http.server import server

    for dependency, override in dependency_overrides.items():
        server.dependency_overrides[dependency] = override
    try:
        yield server
    finally:
        for dependency in dependency_overrides:
            server.dependency_overrides.pop(dependency, None)


def auth_headers(user_id: str, role: UserRoleEnum = UserRoleEnum.MEMBER) -> dict[str, str]:
    token = AuthenticationService.create_auth_token(user_id, role=role)
    return {'Authorization': f'Bearer {token.access_token}'}
