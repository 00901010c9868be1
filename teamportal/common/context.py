"""
Used to track global application context
User information
Request information
Used for request logging and error reporting.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Any, Dict

from sentry_sdk import (
    set_tag as set_sentry_tag,
)
from sentry_sdk import (
    set_user as set_sentry_user,
)

from teamportal.common.enum import BaseEnum

_app_context: ContextVar[Dict[str, Any] | None] = ContextVar('_app_context', default=None)

_user_type_key = 'user'
_user_id_key = 'user_id'
_user_role_key = 'user_role'
_request_id_key = 'request_id'
_breadcrumb_key = 'breadcrumb'
_unknown = 'UNKNOWN'


class AppContextUserType(BaseEnum):
    UNKNOWN = _unknown  # Default but should be overridden by every entry point
    USER = 'U'  # Implies data was modified by App user
    MANUAL = 'M'  # Implies data was modified by engineer
    SYSTEM = 'S'  # Implies data was modified through scripts or tests


def reset(token: Token[Dict[str, Any] | None]) -> None:
    _app_context.reset(token)


def initialize(
    user_type: AppContextUserType = AppContextUserType.UNKNOWN,
    user_id: str | None = None,
    request_id: str | None = None,
    breadcrumb: str | None = None,
) -> Token[Dict[str, Any] | None]:
    context = {
        _user_type_key: user_type,
        _user_id_key: user_id,
        _user_role_key: None,
        _request_id_key: request_id or str(uuid.uuid4()),
        _breadcrumb_key: breadcrumb,
    }
    token = _app_context.set(context)
    return token


def set_user(
    user_type: AppContextUserType,
    user_id: str | None = None,
    user_role: str | None = None,
) -> None:
    app_ctx = _app_context.get()
    if app_ctx is None:
        raise RuntimeError('Application context not initialized')

    app_ctx[_user_type_key] = user_type
    app_ctx[_user_id_key] = user_id
    app_ctx[_user_role_key] = user_role
    set_sentry_user(dict(id=user_id))


def set_request_id(request_id: str) -> None:
    app_ctx = _app_context.get()
    if app_ctx is None:
        raise RuntimeError('Application context not initialized')
    app_ctx[_request_id_key] = request_id
    set_sentry_tag('request_id', request_id)


def get_safe_request_id() -> str | None:
    """
    safely accessible at anypoint in application lifecycle
    """
    app_ctx = _app_context.get()
    if app_ctx:
        return app_ctx.get(_request_id_key)
    return None


def get_safe_user_id() -> str | None:
    """
    Safely accessible at anypoint in application lifecycle
    """
    app_ctx = _app_context.get()
    if app_ctx:
        return app_ctx.get(_user_id_key)
    return None
