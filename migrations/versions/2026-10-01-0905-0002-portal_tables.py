"""users, time blocks, revenue entries and expected revenue

Revision ID: 0002_portal_tables
Revises: 0001_gen_nanoid
Create Date: 2026-10-01 09:05:00

"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0002_portal_tables'
down_revision = '0001_gen_nanoid'
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.Column('modified_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    # Lets the gist exclusion constraint compare user_id with =
    op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')

    op.create_table(
        'user',
        sa.Column('id', sa.String(length=50), server_default=sa.text("gen_nanoid('user')"), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('display_name', sa.String(length=200), nullable=True),
        sa.Column(
            'role',
            postgresql.ENUM('member', 'admin', name='userrole'),
            server_default='member',
            nullable=False,
        ),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)
    op.create_index('idx_user_email_lower', 'user', [sa.text('lower(email)')], unique=True)

    op.create_table(
        'timeblock',
        sa.Column('id', sa.String(length=50), server_default=sa.text("gen_nanoid('tblk')"), nullable=False),
        sa.Column('user_id', sa.String(length=50), nullable=False),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            'label',
            postgresql.ENUM('Work', 'Sleep', 'Idle', 'Absent', name='timeblocklabel'),
            server_default='Work',
            nullable=False,
        ),
        sa.Column('note', sa.String(length=2000), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('end_at > start_at', name='timeblock_end_after_start'),
    )
    op.create_index('idx_timeblock_user_start', 'timeblock', ['user_id', 'start_at'])
    op.create_index('idx_timeblock_user_end', 'timeblock', ['user_id', 'end_at'])
    op.execute(
        """
        ALTER TABLE timeblock
        ADD CONSTRAINT timeblock_no_overlap
        EXCLUDE USING gist (user_id WITH =, tstzrange(start_at, end_at, '[)') WITH &&)
        """
    )

    op.create_table(
        'revenueentry',
        sa.Column('id', sa.String(length=50), server_default=sa.text("gen_nanoid('rev')"), nullable=False),
        sa.Column('user_id', sa.String(length=50), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('note', sa.String(length=2000), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_revenueentry_user_date', 'revenueentry', ['user_id', 'date'])

    op.create_table(
        'expectedrevenue',
        sa.Column('id', sa.String(length=50), server_default=sa.text("gen_nanoid('xrev')"), nullable=False),
        sa.Column('user_id', sa.String(length=50), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'year', 'month', name='uq_expectedrevenue_user_year_month'),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='expectedrevenue_month_range'),
        sa.CheckConstraint('year BETWEEN 2000 AND 2100', name='expectedrevenue_year_range'),
        sa.CheckConstraint('amount >= 0', name='expectedrevenue_amount_positive'),
    )


def downgrade() -> None:
    op.drop_table('expectedrevenue')
    op.drop_index('idx_revenueentry_user_date', table_name='revenueentry')
    op.drop_table('revenueentry')
    op.drop_index('idx_timeblock_user_end', table_name='timeblock')
    op.drop_index('idx_timeblock_user_start', table_name='timeblock')
    op.drop_table('timeblock')
    op.drop_index('idx_user_email_lower', table_name='user')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
    op.execute('DROP TYPE IF EXISTS timeblocklabel')
    op.execute('DROP TYPE IF EXISTS userrole')
