import uuid
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import ValidationError

from teamportal import settings
from teamportal.common.exceptions import InternalException
from teamportal.common.nanoid import NanoIdType
from teamportal.core.authentication.domains import Token, TokenContent
from teamportal.core.user import UserService
from teamportal.core.user.constants import UserRoleEnum


class AuthException(InternalException): ...


class AuthTokenInvalid(AuthException): ...


class AuthTokenExpired(AuthException): ...


class AuthenticationService:
    """
    Tokens are issued by the identity provider in front of the portal. We only
    verify them, issuing is kept for local tooling and tests.
    """

    _JWT_SIGNING_ALGORITHM = 'HS256'

    def __init__(self, user_service: UserService | None = None):
        self.user_service = user_service or UserService()

    @classmethod
    def factory(cls) -> 'AuthenticationService':
        return cls(user_service=UserService.factory())

    @classmethod
    def create_auth_token(
        cls,
        user_id: NanoIdType,
        role: UserRoleEnum | str = UserRoleEnum.MEMBER,
        lifetime: timedelta | None = None,
    ) -> Token:
        lifetime = lifetime if lifetime is not None else settings.AUTH_SETTINGS['ACCESS_TOKEN_LIFETIME']
        expires_at = datetime.now(tz=timezone.utc) + lifetime
        return Token(access_token=cls._create_token(user_id, role=str(role), expire=expires_at))

    @classmethod
    def _create_token(cls, sub: str, role: str, expire: datetime, secret_key: str | None = None) -> str:
        secret_key = secret_key or settings.SECRET_KEY
        jwt_content = {
            'jti': str(uuid.uuid4()),
            'exp': int(expire.timestamp()),
            'sub': sub,
            'role': role,
            'nbf': int(datetime.now(tz=timezone.utc).timestamp()),
        }
        return jwt.encode(jwt_content, secret_key, algorithm=cls._JWT_SIGNING_ALGORITHM)

    @classmethod
    def verify_jwt_token(cls, token: str | None) -> TokenContent:
        if token is None:
            raise AuthTokenInvalid(message='Token missing')
        if not isinstance(token, str):
            raise AuthTokenInvalid(message='Invalid token format')

        try:
            decoded_token = jwt.decode(token, settings.SECRET_KEY, algorithms=[cls._JWT_SIGNING_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthTokenExpired(message='Token expired')
        except jwt.InvalidTokenError:
            raise AuthTokenInvalid(message='Token invalid')

        try:
            return TokenContent.model_validate(decoded_token)
        except ValidationError:
            raise AuthTokenInvalid(message='Token claims invalid')
