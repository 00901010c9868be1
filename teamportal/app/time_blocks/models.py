from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, String, func, literal_column
from sqlalchemy.dialects.postgresql import ExcludeConstraint
from sqlalchemy.orm import Mapped, mapped_column

from teamportal.app.time_blocks.constants import DEFAULT_LABEL, TIME_BLOCK_PK_ABBREV, TimeBlockLabel
from teamportal.app.time_blocks.domains import TimeBlockInsert, TimeBlockRead
from teamportal.common.model import BaseModel
from teamportal.core.user.models import HasUser

TIME_BLOCK_NO_OVERLAP_CONSTRAINT = 'timeblock_no_overlap'


class TimeBlock(HasUser, BaseModel[TimeBlockRead, TimeBlockInsert]):
    """A labelled span of a user's time. Spans of one user never intersect."""

    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    label: Mapped[TimeBlockLabel] = mapped_column(
        TimeBlockLabel.as_column_type('timeblocklabel'),
        nullable=False,
        server_default=DEFAULT_LABEL.value,
    )
    note: Mapped[str | None] = mapped_column(String(length=2000), nullable=True)

    __pk_abbrev__ = TIME_BLOCK_PK_ABBREV
    __read_domain__ = TimeBlockRead
    __create_domain__ = TimeBlockInsert

    __table_args__ = (
        CheckConstraint('end_at > start_at', name='timeblock_end_after_start'),
        # Half open ranges so touching blocks are allowed. Needs btree_gist.
        ExcludeConstraint(
            ('user_id', '='),
            (func.tstzrange(literal_column('start_at'), literal_column('end_at'), literal_column("'[)'")), '&&'),
            name=TIME_BLOCK_NO_OVERLAP_CONSTRAINT,
            using='gist',
        ),
        Index('idx_timeblock_user_start', 'user_id', 'start_at'),
        Index('idx_timeblock_user_end', 'user_id', 'end_at'),
    )
