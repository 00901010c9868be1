from teamportal.app.rankings.assembler import assemble_revenue_ranking, assemble_work_hours_ranking
from teamportal.app.rankings.domains import RevenueRankingEntry, WorkHoursRankingEntry
from teamportal.app.rankings.service import RankingService

__all__ = [
    'RankingService',
    'RevenueRankingEntry',
    'WorkHoursRankingEntry',
    'assemble_revenue_ranking',
    'assemble_work_hours_ranking',
]
