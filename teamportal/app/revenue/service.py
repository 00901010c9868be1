import datetime
from decimal import Decimal

from loguru import logger

from teamportal.app.revenue.domains import (
    ExpectedRevenueInsert,
    ExpectedRevenueMonth,
    ExpectedRevenueRead,
    RevenueEntryCreate,
    RevenueEntryInsert,
    RevenueEntryRead,
    RevenueEntryUpdate,
)
from teamportal.app.revenue.exceptions import RevenueEntryNotFound, RevenueInputInvalid
from teamportal.app.revenue.models import ExpectedRevenue, RevenueEntry
from teamportal.common.nanoid import NanoIdType
from teamportal.core.user import UserService


class RevenueService:
    def __init__(self, user_service: UserService):
        self.user_service = user_service

    @classmethod
    def factory(cls) -> 'RevenueService':
        return cls(user_service=UserService.factory())

    def list_entries(
        self,
        user_id: NanoIdType,
        date_from: datetime.date | None = None,
        date_to: datetime.date | None = None,
    ) -> list[RevenueEntryRead]:
        """
        Entries dated within [date_from, date_to], both ends inclusive, newest first
        """
        clauses = [RevenueEntry.user_id == user_id]
        if date_from is not None:
            clauses.append(RevenueEntry.date >= date_from)
        if date_to is not None:
            clauses.append(RevenueEntry.date <= date_to)

        return RevenueEntry.list(*clauses, ordering=['-date', '-created_at'])

    def list_entries_for_users(self, user_ids: list[NanoIdType]) -> list[RevenueEntryRead]:
        if not user_ids:
            return []
        return RevenueEntry.list(RevenueEntry.user_id.in_(user_ids), ordering=['user_id', 'date'])

    def create_entry(self, user_id: NanoIdType, entry: RevenueEntryCreate) -> RevenueEntryRead:
        # Raises UserNotFound for unknown owners instead of a foreign key failure
        self.user_service.lock_user_for_update(user_id)
        created = RevenueEntry.create(
            RevenueEntryInsert(user_id=user_id, date=entry.date, amount=entry.amount, note=entry.note)
        )
        logger.info(f'created revenue entry {created.id} for {user_id}')
        return created

    def _get_entry_for_actor(self, id: NanoIdType, user_id: NanoIdType, is_admin: bool) -> RevenueEntryRead:
        # Admins manage everyone's entries
        specification = {'id': id} if is_admin else {'id': id, 'user_id': user_id}
        entry = RevenueEntry.get_or_none(**specification)
        if entry is None:
            raise RevenueEntryNotFound(message='Revenue entry not found')
        return entry

    def update_entry(
        self,
        id: NanoIdType,
        user_id: NanoIdType,
        entry_update: RevenueEntryUpdate,
        is_admin: bool = False,
    ) -> RevenueEntryRead:
        updates = entry_update.get_provided_fields()
        if not updates:
            raise RevenueInputInvalid(message='No fields to update')
        if ('date' in updates and updates['date'] is None) or ('amount' in updates and updates['amount'] is None):
            raise RevenueInputInvalid(message='date and amount cannot be cleared')

        entry = self._get_entry_for_actor(id=id, user_id=user_id, is_admin=is_admin)
        updated = RevenueEntry.update(id=entry.id, **updates)
        logger.info(f'updated revenue entry {id} by {user_id}')
        return updated

    def delete_entry(self, id: NanoIdType, user_id: NanoIdType, is_admin: bool = False) -> None:
        clauses = [RevenueEntry.id == id]
        if not is_admin:
            clauses.append(RevenueEntry.user_id == user_id)

        if not RevenueEntry.delete(*clauses):
            raise RevenueEntryNotFound(message='Revenue entry not found')

        logger.info(f'deleted revenue entry {id} by {user_id}')

    def get_expected(self, user_id: NanoIdType, year: int, month: int) -> Decimal | None:
        expected = ExpectedRevenue.get_or_none(user_id=user_id, year=year, month=month)
        return expected.amount if expected else None

    def get_expected_month(self, user_id: NanoIdType, year: int, month: int) -> ExpectedRevenueMonth:
        return ExpectedRevenueMonth(year=year, month=month, amount=self.get_expected(user_id, year, month))

    def list_expected_for_month(self, user_ids: list[NanoIdType], year: int, month: int) -> dict[str, Decimal]:
        if not user_ids:
            return {}

        targets = ExpectedRevenue.list(
            ExpectedRevenue.user_id.in_(user_ids),
            ExpectedRevenue.year == year,
            ExpectedRevenue.month == month,
        )
        return {target.user_id: target.amount for target in targets}

    def set_expected(self, user_id: NanoIdType, year: int, month: int, amount: Decimal) -> ExpectedRevenueRead:
        self.user_service.lock_user_for_update(user_id)
        expected = ExpectedRevenue.upsert(
            ExpectedRevenueInsert(user_id=user_id, year=year, month=month, amount=amount),
            index_elements=['user_id', 'year', 'month'],
            update_fields=['amount'],
        )
        logger.info(f'set expected revenue {year}-{month:02d} for {user_id}')
        return expected
