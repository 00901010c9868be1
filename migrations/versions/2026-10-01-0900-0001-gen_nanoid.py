"""gen_nanoid function used for primary keys

Revision ID: 0001_gen_nanoid
Revises:
Create Date: 2026-10-01 09:00:00

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '0001_gen_nanoid'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    conn = op.get_bind()
    # Alphabet and length mirror teamportal.common.nanoid.NanoId
    conn.execute(
        sa.text(
            """
            CREATE EXTENSION IF NOT EXISTS pgcrypto;
            CREATE OR REPLACE FUNCTION gen_nanoid(abbreviation varchar(5) default null)
            RETURNS text AS $$
            DECLARE
              id text := '';
              id_size int := 13;
              i int := 0;
              char_pool char(62) := '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ';
              bytes bytea := gen_random_bytes(id_size);
            BEGIN
              WHILE i < id_size LOOP
                id := id || substr(char_pool, (get_byte(bytes, i) % 62) + 1, 1);
                i = i + 1;
              END LOOP;
              IF abbreviation is not null THEN
                id := abbreviation || '-' || id;
              END IF;
              RETURN id;
            END
            $$ LANGUAGE PLPGSQL VOLATILE;
            """
        )
    )


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(sa.text('DROP FUNCTION IF EXISTS gen_nanoid;'))
