from datetime import datetime, timezone

from loguru import logger
from sqlalchemy.exc import IntegrityError

from teamportal.app.time_blocks.domains import TimeBlockCreate, TimeBlockInsert, TimeBlockRead, TimeBlockUpdate
from teamportal.app.time_blocks.exceptions import TimeBlockInvalid, TimeBlockNotFound, TimeBlockOverlap
from teamportal.app.time_blocks.models import TimeBlock
from teamportal.common.nanoid import NanoIdType
from teamportal.core.user import UserService
from teamportal.network.database.repository.exceptions import (
    CHECK_VIOLATION,
    EXCLUSION_VIOLATION,
    get_violation_code,
)


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes from clients are read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _validate_span(start_at: datetime, end_at: datetime) -> None:
    if end_at <= start_at:
        raise TimeBlockInvalid(message='endAt must be after startAt')


class TimeBlockService:
    def __init__(self, user_service: UserService):
        self.user_service = user_service

    @classmethod
    def factory(cls) -> 'TimeBlockService':
        return cls(user_service=UserService.factory())

    def get_time_block(self, id: NanoIdType, user_id: NanoIdType) -> TimeBlockRead:
        time_block = TimeBlock.get_or_none(id=id, user_id=user_id)
        if time_block is None:
            raise TimeBlockNotFound(message='Time block not found')
        return time_block

    def list_time_blocks(
        self,
        user_id: NanoIdType,
        range_start: datetime | None = None,
        range_end: datetime | None = None,
    ) -> list[TimeBlockRead]:
        """
        Blocks of the user that intersect [range_start, range_end), ordered by start
        """
        clauses = [TimeBlock.user_id == user_id]
        if range_start is not None:
            clauses.append(TimeBlock.end_at > _as_utc(range_start))
        if range_end is not None:
            clauses.append(TimeBlock.start_at < _as_utc(range_end))

        return TimeBlock.list(*clauses, ordering=['start_at'])

    def list_time_blocks_for_users(
        self,
        user_ids: list[NanoIdType],
        labels: list[str] | None = None,
    ) -> list[TimeBlockRead]:
        if not user_ids:
            return []

        clauses = [TimeBlock.user_id.in_(user_ids)]
        if labels:
            clauses.append(TimeBlock.label.in_(labels))

        return TimeBlock.list(*clauses, ordering=['user_id', 'start_at'])

    def check_overlap(
        self,
        user_id: NanoIdType,
        start_at: datetime,
        end_at: datetime,
        exclude_id: NanoIdType | None = None,
    ) -> bool:
        clauses = [
            TimeBlock.user_id == user_id,
            TimeBlock.start_at < _as_utc(end_at),
            TimeBlock.end_at > _as_utc(start_at),
        ]
        if exclude_id is not None:
            clauses.append(TimeBlock.id != exclude_id)

        return TimeBlock.exists(*clauses)

    def create_time_block(self, user_id: NanoIdType, time_block: TimeBlockCreate) -> TimeBlockRead:
        start_at, end_at = _as_utc(time_block.start_at), _as_utc(time_block.end_at)
        _validate_span(start_at, end_at)
        label, note = time_block.resolve_label_and_note()

        # Serializes check-then-insert for this user until the transaction ends
        self.user_service.lock_user_for_update(user_id)
        if self.check_overlap(user_id, start_at, end_at):
            logger.warning(f'time block overlap on create for {user_id}: {start_at} - {end_at}')
            raise TimeBlockOverlap(message='Time block overlaps an existing block')

        try:
            created = TimeBlock.create(
                TimeBlockInsert(user_id=user_id, start_at=start_at, end_at=end_at, label=label, note=note)
            )
        except IntegrityError as e:
            raise self._translate_integrity_error(e)

        logger.info(f'created time block {created.id} for {user_id}')
        return created

    def update_time_block(self, id: NanoIdType, user_id: NanoIdType, time_block: TimeBlockUpdate) -> TimeBlockRead:
        if not time_block.has_changes():
            raise TimeBlockInvalid(message='No fields to update')

        provided = time_block.get_provided_fields()
        if ('start_at' in provided and provided['start_at'] is None) or (
            'end_at' in provided and provided['end_at'] is None
        ):
            raise TimeBlockInvalid(message='startAt and endAt cannot be cleared')

        self.user_service.lock_user_for_update(user_id)
        existing = self.get_time_block(id=id, user_id=user_id)

        updates = time_block.get_label_changes()
        start_at = _as_utc(time_block.start_at) if time_block.start_at else existing.start_at
        end_at = _as_utc(time_block.end_at) if time_block.end_at else existing.end_at
        if 'start_at' in provided or 'end_at' in provided:
            _validate_span(start_at, end_at)
            if self.check_overlap(user_id, start_at, end_at, exclude_id=id):
                logger.warning(f'time block overlap on update of {id}: {start_at} - {end_at}')
                raise TimeBlockOverlap(message='Time block overlaps an existing block')
            updates.update(start_at=start_at, end_at=end_at)

        try:
            updated = TimeBlock.update(id=id, **updates)
        except IntegrityError as e:
            raise self._translate_integrity_error(e)

        logger.info(f'updated time block {id} for {user_id}')
        return updated

    def delete_time_block(self, id: NanoIdType, user_id: NanoIdType) -> None:
        deleted = TimeBlock.delete(TimeBlock.id == id, TimeBlock.user_id == user_id)
        if not deleted:
            raise TimeBlockNotFound(message='Time block not found')

        logger.info(f'deleted time block {id} for {user_id}')

    @staticmethod
    def _translate_integrity_error(error: IntegrityError) -> Exception:
        code = get_violation_code(error)
        if code == EXCLUSION_VIOLATION:
            logger.warning('time block overlap caught by exclusion constraint')
            return TimeBlockOverlap(message='Time block overlaps an existing block')
        if code == CHECK_VIOLATION:
            return TimeBlockInvalid(message='endAt must be after startAt')
        return error
