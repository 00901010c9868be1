from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request

from teamportal.common import context


class HTTPAppContextMiddleware(BaseHTTPMiddleware):
    """
    Every request starts with a fresh application context. The user is
    filled in later by the authentication guard.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        token = context.initialize(
            user_type=context.AppContextUserType.UNKNOWN,
            breadcrumb=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            context.reset(token)
