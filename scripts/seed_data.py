#!/usr/bin/env python3
"""Seed the database with realistic-looking data for local development."""

import random
from datetime import datetime, timedelta
from decimal import Decimal

from teamportal import setup
from teamportal.app.periods import APP_TIMEZONE, get_today
from teamportal.app.revenue import RevenueEntry, RevenueEntryCreate, RevenueService
from teamportal.app.time_blocks import TimeBlock, TimeBlockCreate, TimeBlockLabel, TimeBlockService
from teamportal.common import context
from teamportal.core.authentication import AuthenticationService
from teamportal.core.user import UserCreate, UserRoleEnum, UserService
from teamportal.network.database.session import SessionManager

ADMIN = {'display_name': 'Portal Admin', 'email': 'admin@example.com'}

MEMBERS = [
    {'display_name': 'Alex Chen', 'email': 'alex.chen@example.com'},
    {'display_name': 'Sarah Johnson', 'email': 'sarah.johnson@example.com'},
    {'display_name': 'Marcus Williams', 'email': 'marcus.williams@example.com'},
    {'display_name': 'Emily Rodriguez', 'email': 'emily.rodriguez@example.com'},
    # No display name, the roster falls back to email
    {'display_name': None, 'email': 'contractor@example.com'},
]

# (label, local start hour, local end hour) for a typical day
DAY_TEMPLATE = [
    (TimeBlockLabel.SLEEP, 0, 8),
    (TimeBlockLabel.WORK, 9, 12),
    (TimeBlockLabel.IDLE, 12, 13),
    (TimeBlockLabel.WORK, 13, 18),
]

DAYS_OF_HISTORY = 21


def seed_data():
    """Seed the database with sample data."""
    setup.run()

    context.initialize(
        user_type=context.AppContextUserType.SYSTEM,
        user_id='user-system',
        request_id='seed-script',
    )

    with SessionManager(commit_on_success=True):
        _run_seed()


def _run_seed():
    """Actual seed logic with db context."""
    print('Seeding database with sample data...')
    user_service = UserService.factory()
    time_block_service = TimeBlockService.factory()
    revenue_service = RevenueService.factory()

    admin, _ = user_service.get_or_create_user(UserCreate(role=UserRoleEnum.ADMIN, **ADMIN))
    members = [user_service.get_or_create_user(UserCreate(**member))[0] for member in MEMBERS]

    # Clear existing activity so the script can be rerun
    member_ids = [member.id for member in members]
    TimeBlock.delete(TimeBlock.user_id.in_(member_ids))
    RevenueEntry.delete(RevenueEntry.user_id.in_(member_ids))

    today = get_today(APP_TIMEZONE)
    for member in members:
        # Some members put in more hours than others
        extra_hours = random.choice([0, 0, 1, 2])
        for days_ago in range(DAYS_OF_HISTORY, -1, -1):
            current_date = today - timedelta(days=days_ago)
            if current_date.weekday() >= 5 and random.random() < 0.7:
                continue

            midnight = datetime(current_date.year, current_date.month, current_date.day, tzinfo=APP_TIMEZONE)
            for label, start_hour, end_hour in DAY_TEMPLATE:
                if label == TimeBlockLabel.WORK and end_hour == 18:
                    end_hour += extra_hours
                time_block_service.create_time_block(
                    member.id,
                    TimeBlockCreate(
                        start_at=midnight + timedelta(hours=start_hour),
                        end_at=midnight + timedelta(hours=end_hour),
                        label=label,
                    ),
                )

            if random.random() < 0.4:
                revenue_service.create_entry(
                    member.id,
                    RevenueEntryCreate(
                        date=current_date,
                        amount=Decimal(random.randint(50, 900)),
                        note='client invoice',
                    ),
                )

        # Occasional deduction for tools
        revenue_service.create_entry(
            member.id,
            RevenueEntryCreate(date=today, amount=Decimal('-25.50'), note='tool subscription'),
        )
        revenue_service.set_expected(member.id, today.year, today.month, Decimal(random.randint(3, 8) * 1000))

    print('Done! Database seeded successfully.')
    print('\nAccess tokens for local development:')
    for user in [admin, *members]:
        token = AuthenticationService.create_auth_token(user.id, role=user.role)
        print(f'  {user.email} ({user.role}): {token.access_token}')


if __name__ == '__main__':
    seed_data()
