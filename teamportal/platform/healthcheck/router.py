from fastapi import APIRouter, Response
from sqlalchemy import text
from starlette import status

router = APIRouter()


@router.get('/api')
def status_get(response: Response) -> str:
    """
    Fast check to ensure API is running. Used by load balancers and deploy
    scripts so it must never touch the database.
    """
    response.headers['Content-Type'] = 'text/html; charset=utf-8'

    return 'Team Portal is up'


@router.get('/database')
def database_health_check(response: Response) -> str:
    """
    Fast check to ensure database connectivity.
    """
    from teamportal.network.database.session import db

    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    try:
        db.session.execute(text('SELECT 1'))
    except Exception as e:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return f'Database is unreachable: {e}'

    return 'Database is reachable'
