from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from teamportal.common.model import BaseModel, import_model_modules

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
# This line sets up loggers basically.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

import_model_modules()
target_metadata = BaseModel.metadata


def get_url():
    from sqlalchemy.engine.url import URL

    from teamportal import settings

    DATABASE_URI = URL.create(
        drivername='postgresql',
        username=settings.DB_USER,
        password=settings.DB_PASSWORD,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
    ).render_as_string(hide_password=False)
    return DATABASE_URI


class MissingMigrationMessage(Exception): ...


def include_object(object, name, type_, reflected, compare_to):
    # Autogenerate can't compare expression based exclusion constraints
    if type_ == 'constraint' and name == 'timeblock_no_overlap':
        return False
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    This configures the context with just a URL and not an Engine. Calls to
    context.execute() here emit the given string to the script output.
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode.

    In this scenario we need to create an Engine
    and associate a connection with the context.
    """
    configuration = config.get_section(config.config_ini_section) or {}
    configuration['sqlalchemy.url'] = get_url()

    if hasattr(config.cmd_opts, 'message'):
        if not config.cmd_opts.message:
            raise MissingMigrationMessage("Missing migration message!\n Add with `make migrations m='some message'`")

    connectable = engine_from_config(
        configuration,
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            include_object=include_object,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
