from fastapi import APIRouter

from teamportal.app.rankings.router import router as rankings_router
from teamportal.app.revenue.router import router as revenue_router
from teamportal.app.team.router import router as team_router
from teamportal.app.time_blocks.router import router as time_blocks_router

# Create the root API router
api_router = APIRouter()

# Include domain routers
api_router.include_router(time_blocks_router, prefix='/time-blocks', tags=['time-blocks'])
api_router.include_router(revenue_router, prefix='/revenue', tags=['revenue'])
api_router.include_router(rankings_router, prefix='/rankings', tags=['rankings'])
api_router.include_router(team_router, prefix='/team', tags=['team'])
