from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from teamportal.app.time_blocks import (
    TimeBlock,
    TimeBlockCreate,
    TimeBlockInsert,
    TimeBlockInvalid,
    TimeBlockLabel,
    TimeBlockNotFound,
    TimeBlockOverlap,
    TimeBlockService,
    TimeBlockUpdate,
)
from teamportal.core.user import UserNotFound
from teamportal.network.database.repository.exceptions import EXCLUSION_VIOLATION, get_violation_code

UTC = timezone.utc
TOKYO = timezone(timedelta(hours=9))


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


@pytest.fixture
def service() -> TimeBlockService:
    return TimeBlockService.factory()


@pytest.fixture
def morning(service, member):
    return service.create_time_block(
        member.id,
        TimeBlockCreate(start_at=utc(2024, 3, 12, 9), end_at=utc(2024, 3, 12, 12), note='deploy'),
    )


class TestCreateTimeBlock:
    def test_create(self, service, member):
        created = service.create_time_block(
            member.id,
            TimeBlockCreate(start_at=utc(2024, 3, 12, 0), end_at=utc(2024, 3, 12, 7), summary='Sleep\n\nlong night'),
        )

        assert created.id.startswith('tblk-')
        assert created.user_id == member.id
        assert created.label == TimeBlockLabel.SLEEP
        assert created.note == 'long night'
        assert created.summary == 'Sleep\n\nlong night'

    def test_offsets_are_normalized(self, service, member):
        created = service.create_time_block(
            member.id,
            TimeBlockCreate(
                start_at=datetime(2024, 3, 12, 18, tzinfo=TOKYO),
                end_at=datetime(2024, 3, 12, 20, tzinfo=TOKYO),
            ),
        )
        assert created.start_at == utc(2024, 3, 12, 9)
        assert created.end_at == utc(2024, 3, 12, 11)

    def test_naive_times_are_utc(self, service, member):
        created = service.create_time_block(
            member.id, TimeBlockCreate(start_at=datetime(2024, 3, 12, 9), end_at=datetime(2024, 3, 12, 10))
        )
        assert created.start_at == utc(2024, 3, 12, 9)

    @pytest.mark.parametrize('hours', [0, -1])
    def test_end_must_follow_start(self, service, member, hours):
        with pytest.raises(TimeBlockInvalid):
            service.create_time_block(
                member.id,
                TimeBlockCreate(start_at=utc(2024, 3, 12, 9), end_at=utc(2024, 3, 12, 9) + timedelta(hours=hours)),
            )

    @pytest.mark.parametrize(
        'start_at, end_at',
        [
            (utc(2024, 3, 12, 11), utc(2024, 3, 12, 13)),
            (utc(2024, 3, 12, 8), utc(2024, 3, 12, 10)),
            (utc(2024, 3, 12, 10), utc(2024, 3, 12, 11)),
            (utc(2024, 3, 12, 8), utc(2024, 3, 12, 13)),
        ],
    )
    def test_overlap_is_rejected(self, service, member, morning, start_at, end_at):
        with pytest.raises(TimeBlockOverlap):
            service.create_time_block(member.id, TimeBlockCreate(start_at=start_at, end_at=end_at))

        assert service.list_time_blocks(member.id) == [morning]

    def test_touching_blocks_are_allowed(self, service, member, morning):
        before = service.create_time_block(
            member.id, TimeBlockCreate(start_at=utc(2024, 3, 12, 8), end_at=utc(2024, 3, 12, 9))
        )
        after = service.create_time_block(
            member.id, TimeBlockCreate(start_at=utc(2024, 3, 12, 12), end_at=utc(2024, 3, 12, 13))
        )
        assert [block.id for block in service.list_time_blocks(member.id)] == [before.id, morning.id, after.id]

    def test_other_users_may_overlap(self, service, other_member, morning):
        created = service.create_time_block(
            other_member.id, TimeBlockCreate(start_at=utc(2024, 3, 12, 9), end_at=utc(2024, 3, 12, 12))
        )
        assert created.user_id == other_member.id

    def test_unknown_user(self, service):
        with pytest.raises(UserNotFound):
            service.create_time_block(
                'user-missing', TimeBlockCreate(start_at=utc(2024, 3, 12, 9), end_at=utc(2024, 3, 12, 12))
            )

    def test_database_rejects_overlap(self, member, morning):
        with pytest.raises(IntegrityError) as exc_info:
            TimeBlock.create(
                TimeBlockInsert(user_id=member.id, start_at=utc(2024, 3, 12, 10), end_at=utc(2024, 3, 12, 11))
            )
        assert get_violation_code(exc_info.value) == EXCLUSION_VIOLATION


class TestListTimeBlocks:
    def test_range_is_intersecting(self, service, member, morning):
        afternoon = service.create_time_block(
            member.id, TimeBlockCreate(start_at=utc(2024, 3, 12, 13), end_at=utc(2024, 3, 12, 17))
        )

        assert service.list_time_blocks(member.id, utc(2024, 3, 12, 11), utc(2024, 3, 12, 14)) == [morning, afternoon]
        # Ends are exclusive
        assert service.list_time_blocks(member.id, utc(2024, 3, 12, 12), utc(2024, 3, 12, 13)) == []
        assert service.list_time_blocks(member.id, utc(2024, 3, 13), utc(2024, 3, 14)) == []

    def test_only_own_blocks(self, service, other_member, morning):
        assert service.list_time_blocks(other_member.id) == []

    def test_for_users_filters_labels(self, service, member, other_member, morning):
        service.create_time_block(
            other_member.id,
            TimeBlockCreate(start_at=utc(2024, 3, 12, 12), end_at=utc(2024, 3, 12, 13), label=TimeBlockLabel.IDLE),
        )

        blocks = service.list_time_blocks_for_users([member.id, other_member.id], labels=['Work'])
        assert [block.id for block in blocks] == [morning.id]
        assert service.list_time_blocks_for_users([]) == []


class TestUpdateTimeBlock:
    def test_note_only_keeps_label(self, service, member):
        created = service.create_time_block(
            member.id,
            TimeBlockCreate(start_at=utc(2024, 3, 12, 0), end_at=utc(2024, 3, 12, 7), label=TimeBlockLabel.SLEEP),
        )

        updated = service.update_time_block(created.id, member.id, TimeBlockUpdate(note='restless'))
        assert updated.label == TimeBlockLabel.SLEEP
        assert updated.note == 'restless'
        assert updated.start_at == created.start_at

    def test_move_within_own_span(self, service, member, morning):
        updated = service.update_time_block(morning.id, member.id, TimeBlockUpdate(start_at=utc(2024, 3, 12, 10)))
        assert updated.start_at == utc(2024, 3, 12, 10)
        assert updated.end_at == utc(2024, 3, 12, 12)

    def test_move_onto_another_block(self, service, member, morning):
        afternoon = service.create_time_block(
            member.id, TimeBlockCreate(start_at=utc(2024, 3, 12, 13), end_at=utc(2024, 3, 12, 17))
        )
        with pytest.raises(TimeBlockOverlap):
            service.update_time_block(afternoon.id, member.id, TimeBlockUpdate(start_at=utc(2024, 3, 12, 11)))

        assert service.get_time_block(afternoon.id, member.id).start_at == utc(2024, 3, 12, 13)

    def test_inverted_span(self, service, member, morning):
        with pytest.raises(TimeBlockInvalid):
            service.update_time_block(morning.id, member.id, TimeBlockUpdate(end_at=utc(2024, 3, 12, 8)))

    def test_empty_update(self, service, member, morning):
        with pytest.raises(TimeBlockInvalid):
            service.update_time_block(morning.id, member.id, TimeBlockUpdate())

    def test_cleared_time(self, service, member, morning):
        with pytest.raises(TimeBlockInvalid):
            service.update_time_block(morning.id, member.id, TimeBlockUpdate(start_at=None))

    def test_someone_elses_block(self, service, other_member, morning):
        with pytest.raises(TimeBlockNotFound):
            service.update_time_block(morning.id, other_member.id, TimeBlockUpdate(note='mine now'))


class TestDeleteTimeBlock:
    def test_delete(self, service, member, morning):
        service.delete_time_block(morning.id, member.id)
        assert service.list_time_blocks(member.id) == []

    def test_someone_elses_block(self, service, member, other_member, morning):
        with pytest.raises(TimeBlockNotFound):
            service.delete_time_block(morning.id, other_member.id)

        assert service.list_time_blocks(member.id) == [morning]


def test_check_overlap_excludes_block(service, member, morning):
    assert service.check_overlap(member.id, utc(2024, 3, 12, 10), utc(2024, 3, 12, 11))
    assert not service.check_overlap(member.id, utc(2024, 3, 12, 10), utc(2024, 3, 12, 11), exclude_id=morning.id)
    assert not service.check_overlap(member.id, utc(2024, 3, 12, 12), utc(2024, 3, 12, 13))
