from starlette.routing import Route

from teamportal.network.database.session import DatabaseMode

_ROUTE_DATABASE_MODE_KEY = '_database_mode'


def read_only_route(func):
    """
    Marks a fastapi route as read-only for database access. The session
    middleware checks the flag and binds the request to the replica.

    Example:
        @read_only_route
        @router.get('/work-hours')
        def get_work_hours_ranking():
            return RankingService.get_work_hours_ranking()
    """
    setattr(func, _ROUTE_DATABASE_MODE_KEY, DatabaseMode.READ_ONLY)
    return func


def route_database_mode_checker(route: Route) -> DatabaseMode:
    if not isinstance(route, Route):
        return DatabaseMode.READ_WRITE

    return getattr(route.endpoint, _ROUTE_DATABASE_MODE_KEY, DatabaseMode.READ_WRITE)
