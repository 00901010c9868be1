from teamportal.app.time_blocks.codec import format_summary, parse_summary
from teamportal.app.time_blocks.constants import TimeBlockLabel
from teamportal.app.time_blocks.domains import TimeBlockCreate, TimeBlockInsert, TimeBlockRead, TimeBlockUpdate
from teamportal.app.time_blocks.exceptions import TimeBlockInvalid, TimeBlockNotFound, TimeBlockOverlap
from teamportal.app.time_blocks.models import TimeBlock
from teamportal.app.time_blocks.service import TimeBlockService

__all__ = [
    'TimeBlock',
    'TimeBlockCreate',
    'TimeBlockInsert',
    'TimeBlockInvalid',
    'TimeBlockLabel',
    'TimeBlockNotFound',
    'TimeBlockOverlap',
    'TimeBlockRead',
    'TimeBlockService',
    'TimeBlockUpdate',
    'format_summary',
    'parse_summary',
]
