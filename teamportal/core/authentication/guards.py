from typing import Optional

from fastapi import Depends, Request, params, status
from fastapi.security import HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param

from teamportal.common import context
from teamportal.common.exceptions import APIException
from teamportal.core.authentication.domains import AuthenticatedUser
from teamportal.core.authentication.services.authentication_service import (
    AuthenticationService,
    AuthTokenExpired,
    AuthTokenInvalid,
)


class BearerToken(HTTPBearer):
    async def __call__(self, request: Request) -> Optional[str]:  # type: ignore[override]
        # Check for existence of raw token
        authorization = request.headers.get('Authorization')
        scheme, token = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != 'bearer':
            if self.auto_error:
                raise APIException(
                    code=status.HTTP_403_FORBIDDEN,
                    message='Not authenticated',
                )
            else:
                return None
        return token


bearer = BearerToken(
    scheme_name='bearer-jwt',
    description='Signed access token issued by the identity provider',
)


def authenticate_user(
    token: str = Depends(bearer),
    authn_service: AuthenticationService = Depends(AuthenticationService.factory),
) -> AuthenticatedUser:
    try:
        token_content = authn_service.verify_jwt_token(token)
    except AuthTokenExpired:
        raise APIException(
            code=status.HTTP_401_UNAUTHORIZED,
            message='Expired access token',
        )
    except AuthTokenInvalid:
        raise APIException(
            code=status.HTTP_401_UNAUTHORIZED,
            message='Invalid access token',
        )

    # Update global context with authenticated user
    context.set_user(
        user_type=context.AppContextUserType.USER.value,
        user_id=token_content.sub,
        user_role=str(token_content.role),
    )

    return AuthenticatedUser(
        id=token_content.sub,
        role=token_content.role,
        token=token_content,
    )


def authenticate_admin(user: AuthenticatedUser = Depends(authenticate_user)) -> AuthenticatedUser:
    if not user.is_admin:
        raise APIException(
            code=status.HTTP_403_FORBIDDEN,
            message='Admin access required',
        )
    return user


class AuthenticatedUserGuard(params.Security):
    """
    Wrap me to make guards with specific role requirements
    Use:
        AdminUserGuard(AuthenticatedUserGuard)
    in router:
        user: AuthenticatedUser = AdminUserGuard()
    """

    _dependency = staticmethod(authenticate_user)

    def __init__(
        self,
        *,
        use_cache: bool = True,
    ):
        super().__init__(
            dependency=self._dependency,
            use_cache=use_cache,
        )


class AdminUserGuard(AuthenticatedUserGuard):
    _dependency = staticmethod(authenticate_admin)
