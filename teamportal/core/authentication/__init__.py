from teamportal.core.authentication.domains import AuthenticatedUser, Token, TokenContent
from teamportal.core.authentication.guards import (
    AdminUserGuard,
    AuthenticatedUserGuard,
    authenticate_admin,
    authenticate_user,
    bearer,
)
from teamportal.core.authentication.services.authentication_service import (
    AuthenticationService,
    AuthException,
    AuthTokenExpired,
    AuthTokenInvalid,
)

__all__ = [
    # Domains
    'AuthenticatedUser',
    'Token',
    'TokenContent',
    # Guards
    'AdminUserGuard',
    'AuthenticatedUserGuard',
    'authenticate_admin',
    'authenticate_user',
    'bearer',
    # Services
    'AuthException',
    'AuthTokenExpired',
    'AuthTokenInvalid',
    'AuthenticationService',
]
