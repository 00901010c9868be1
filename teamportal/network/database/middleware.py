from typing import Dict, List

from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.routing import Match
from starlette.types import ASGIApp

from teamportal.network.database.decorator import route_database_mode_checker
from teamportal.network.database.session import DatabaseMode, db


class HTTPSessionManagerMiddleware(BaseHTTPMiddleware):
    """
    One session per request. Committed when the handler succeeds and
    rolled back on any error response.
    """

    def __init__(
        self,
        app: ASGIApp,
        commit_on_success: bool = True,
    ):
        super().__init__(app)
        self.commit_on_success = commit_on_success
        self._route_groups: Dict[str, List[APIRoute]] = {}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        database_mode = self._determine_database_mode(request=request)
        with db(commit_on_success=self.commit_on_success, mode=database_mode):
            response = await call_next(request)
            if response.status_code >= 400:
                db.session.rollback()

        return response

    def _determine_database_mode(self, request: Request) -> DatabaseMode:
        """
        Route read-only designated routes to the replica so rankings and
        listings don't add load to the primary
        """
        matched_route = self._match_route(request=request)
        if matched_route:
            return route_database_mode_checker(matched_route)

        # We should never have an unmatched route but default to read / write
        return DatabaseMode.READ_WRITE

    def _match_route(self, request: Request):
        """
        In starlette all route matching occurs after middlewares run
        https://github.com/encode/starlette/issues/685
        Routes are grouped by first path segment to cut down the candidates.
        """
        if not self._route_groups:
            self._route_groups = self._group_routes_by_first_path_segment(request.app.routes)

        path_parts = request.url.path.split('/')
        first_part = next((part for part in path_parts if part), '')

        routes_to_check = self._route_groups.get(first_part, []) + self._route_groups.get('_params', [])
        for route in routes_to_check:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return route

        return None

    def _group_routes_by_first_path_segment(self, routes: List[APIRoute]) -> Dict[str, List[APIRoute]]:
        grouped: Dict[str, List[APIRoute]] = {}

        for route in routes:
            # Newer fastapi keeps included routers as entries without a path
            path = getattr(route, 'path', None)
            if path is None:
                continue

            parts = path.split('/')
            first_part = next((part for part in parts if part), '')

            # Handle routes with parameter as first segment like /{param}/...
            if first_part.startswith('{'):
                first_part = '_params'

            grouped.setdefault(first_part, []).append(route)

        return grouped
