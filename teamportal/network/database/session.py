import time
from contextvars import ContextVar
from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import URL
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session as SqlAlchemySession
from sqlalchemy.pool import NullPool
from sqlalchemy.sql.compiler import FromLinter

from teamportal import settings


class DatabaseMode(Enum):
    READ_WRITE = 'read_write'
    READ_ONLY = 'read_only'


# Create separate engines for read-write and read-only
def create_db_engine(host: str) -> Engine:
    DATABASE_URI = URL.create(
        drivername='postgresql',
        username=settings.DB_USER,
        password=settings.DB_PASSWORD,
        host=host,
        port=settings.DB_PORT,
        database=settings.DB_NAME,
    ).render_as_string(hide_password=False)

    return create_engine(
        DATABASE_URI,
        poolclass=NullPool,
        connect_args={
            # Stored instants are timestamptz, the session zone only affects display
            'options': '-c timezone=utc -c statement_timeout=60000 -c idle_in_transaction_session_timeout=300000',
            'connect_timeout': 10,
        },
        pool_pre_ping=True,
        enable_from_linting=True,  # Ensures we check for Cartesians
    )


_rw_engine = create_db_engine(settings.DB_HOST)
_ro_engine = create_db_engine(settings.DB_HOST_RO)

# Create session makers for each mode
_rw_session_maker = sessionmaker(autocommit=False, autoflush=False, bind=_rw_engine)
_ro_session_maker = sessionmaker(autocommit=False, autoflush=False, bind=_ro_engine)

if settings.DB_LOG_STATEMENTS:
    # Log statements and their execution times
    @event.listens_for(Engine, 'before_cursor_execute')
    def before_cursor_execute(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        conn.info.setdefault('query_start_time', []).append(time.time())
        logger.info(f'Start Query: {statement}', parameters=parameters)

    @event.listens_for(Engine, 'after_cursor_execute')
    def after_cursor_execute(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        total = time.time() - conn.info['query_start_time'].pop(-1)
        logger.info(f'Query Time: {total}')


# Context variables for session storage and mode
# Should be thread safe as well as coroutine safe!
_session_storage: ContextVar[SqlAlchemySession | None] = ContextVar('_session_storage', default=None)
_session_mode: ContextVar[DatabaseMode] = ContextVar('_session_mode', default=DatabaseMode.READ_WRITE)


class ImplicitCartesianDetected(Exception): ...


def raise_for_implicit_cartesians(self: Any, stmt_type: str = 'SELECT') -> None:
    """
    The default behavior for implicit cartesians is to warn, we want
    to raise instead. A simplified version looks like:
    select timeblock.id, "user".email from timeblock, "user";
    """
    the_rest, start_with = self.lint()
    if the_rest:
        froms_str = ', '.join(f'"{self.froms[from_]}"' for from_ in the_rest)
        message = (
            f'{stmt_type} statement: Implicit cartesian product detected between '
            f'FROM element(s) {froms_str} and FROM element "{self.froms[start_with]}". '
            'Apply appropriate join condition(s) between these elements.'
        )
        raise ImplicitCartesianDetected(message)


FromLinter.warn = raise_for_implicit_cartesians  # type: ignore[method-assign]


class SessionNotAvailable(Exception):
    def __init__(self) -> None:
        msg = """
        Either you are not currently in a request context, or you need to manually
        create a session context by using a `db` instance as a context manager e.g.:
        with db():
            db.session.execute(Select(User))
        """
        super().__init__(msg)


class SessionManagerMeta(type):
    """
    Access session as a property on context manager
    without having to init
    """

    @property
    def session(self) -> SqlAlchemySession:
        """
        Make a thread and coroutine safe session
        """
        session = _session_storage.get()
        if session is None:
            raise SessionNotAvailable

        return session

    @property
    def mode(self) -> DatabaseMode:
        return _session_mode.get()


class SessionManager(metaclass=SessionManagerMeta):
    def __init__(
        self,
        session_kwargs: Dict[str, Any] | None = None,
        commit_on_success: bool = False,
        mode: DatabaseMode = DatabaseMode.READ_WRITE,
    ):
        self.session_token: Optional[Any] = None
        self.mode_token: Optional[Any] = None
        self.session_kwargs = session_kwargs or {}
        self.commit_on_success = commit_on_success
        self.mode = mode

    def enter(self) -> Any:
        self.mode_token = _session_mode.set(self.mode)

        # Pytest will create multiple sessions through the API middleware
        # we use this to ensure the session is always shared
        if _session_storage.get() is None:
            session_maker = _rw_session_maker if self.mode == DatabaseMode.READ_WRITE else _ro_session_maker
            session = session_maker(**self.session_kwargs)
            self.session_token = _session_storage.set(session)

        if self.mode == DatabaseMode.READ_ONLY:
            ro_session = _session_storage.get()
            if ro_session is None:
                raise SessionNotAvailable()
            # Used for testing purposes only!
            setattr(ro_session, '_is_read_only', True)

            @event.listens_for(ro_session, 'before_flush')
            def prevent_write_on_readonly(session: SqlAlchemySession, *args: Any, **kwargs: Any) -> None:
                if len(session.new) > 0 or len(session.deleted) > 0 or len(session.dirty) > 0:
                    raise RuntimeError('Cannot modify database in read-only mode')

        return type(self)

    def cleanup(self) -> None:
        session = _session_storage.get()
        if session is not None and self.session_token:
            session.close()
        if self.session_token:
            _session_storage.reset(self.session_token)
        if self.mode_token:
            _session_mode.reset(self.mode_token)

    def __enter__(self) -> Any:
        return self.enter()

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        session = _session_storage.get()
        session_mode = _session_mode.get()
        is_success = exc_type is None

        # Only the manager that opened the session may end its transaction
        if session is not None and self.session_token:
            if self.commit_on_success and is_success and session_mode == DatabaseMode.READ_WRITE:
                session.commit()
            else:
                session.rollback()

        self.cleanup()


# This is what external callers should access!
db: SessionManagerMeta = SessionManager


class IsolatedSession(SessionManager):
    """
    Meant to provide an isolated session away from the main application one above.
    Patches the existing session with a new one and replaces it in the end
    Use:
    with IsolatedSession(commit_on_success=True):
       # Do Stuff with New Session
       ...
    # Original session is replaced
    """

    def __init__(self, session_kwargs: Dict[str, Any] | None = None, commit_on_success: bool = False) -> None:
        super().__init__(session_kwargs=session_kwargs, commit_on_success=commit_on_success)
        self.current_session: Optional[SqlAlchemySession] = None

    def enter(self) -> Any:
        self.current_session = _session_storage.get()
        new_session = _rw_session_maker(**self.session_kwargs)
        self.session_token = _session_storage.set(new_session)

        return new_session

    def cleanup(self) -> None:
        super().cleanup()

        # Set the session back to the original
        _session_storage.set(self.current_session)
