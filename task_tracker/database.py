import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from . import config
from .errors import StorageUnavailable
from .logger import logger

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task

SCHEMA_POLICIES = ("lenient", "strict")


def _normalize_url(url: str) -> str:
    # SQLAlchemy only accepts the postgresql:// scheme.
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def _create_engine(
    url: str,
    environment: str,
    ssl_verify: bool,
    pool_size: int,
    max_overflow: int,
    pool_timeout: float,
    echo: bool,
) -> Engine:
    if url.startswith("sqlite"):
        if _is_memory_sqlite(url):
            # One shared connection, otherwise every checkout sees an empty database.
            return create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
        )

    connect_args = {}
    sslmode = config.database_ssl_mode(url, environment, ssl_verify)
    if sslmode:
        connect_args["sslmode"] = sslmode

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        connect_args=connect_args,
    )


class Database:
    """Handle on the store: owns the engine and its bounded connection pool.

    Built once at start-up and passed to whatever needs the store, so tests
    can hand in an in-memory database instead.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessionmaker = sessionmaker(
            bind=engine,
            class_=Session,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Check a connection out of the pool for the duration of the block.

        The connection goes back to the pool whether the block succeeds or
        raises; a failed block is rolled back first.
        """
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """Run a trivial statement against the store."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def create_database(
    url: Optional[str] = None,
    environment: Optional[str] = None,
    ssl_verify: Optional[bool] = None,
    pool_size: Optional[int] = None,
    max_overflow: Optional[int] = None,
    pool_timeout: Optional[float] = None,
    echo: Optional[bool] = None,
) -> Database:
    """Build a Database from explicit arguments, falling back to config."""
    engine = _create_engine(
        _normalize_url(url or config.DATABASE_URL),
        environment=environment if environment is not None else config.APP_ENV,
        ssl_verify=ssl_verify if ssl_verify is not None else config.DATABASE_SSL_VERIFY,
        pool_size=pool_size if pool_size is not None else config.DB_POOL_SIZE,
        max_overflow=max_overflow if max_overflow is not None else config.DB_MAX_OVERFLOW,
        pool_timeout=pool_timeout if pool_timeout is not None else config.DB_POOL_TIMEOUT,
        echo=echo if echo is not None else config.DB_ECHO,
    )
    return Database(engine)


def ensure_schema(database: Database) -> None:
    """Create the tasks table and its index if they do not exist yet.

    Safe to call on every start: existing tables and rows are left alone.
    """
    try:
        SQLModel.metadata.create_all(bind=database.engine, tables=[Task.__table__])
    except SQLAlchemyError as e:
        raise StorageUnavailable.from_exception(e) from e


def start_schema_initializer(
    database: Database, policy: str = "lenient"
) -> Optional[threading.Thread]:
    """Run ensure_schema at start-up according to the schema init policy.

    "lenient" runs it in a background thread and only logs a failure, so the
    server starts regardless and task requests fail until the table exists.
    "strict" runs it inline and lets the failure abort start-up.
    """
    if policy not in SCHEMA_POLICIES:
        raise ValueError(f"Unknown schema init policy: {policy!r}")

    if policy == "strict":
        ensure_schema(database)
        logger.info("Database tables ready")
        return None

    def _run() -> None:
        try:
            ensure_schema(database)
        except StorageUnavailable as e:
            logger.error(f"Database setup error: {e.message}")
            return
        logger.info("Database tables ready")

    thread = threading.Thread(target=_run, name="schema-initializer", daemon=True)
    thread.start()
    return thread
