"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.context import get_config


class DbSessionService:
    """Process-scoped storage handle: one pooled engine shared by all requests."""

    def __init__(self, config: ConfigData | None = None):
        """Initialize the shared database engine and session factory."""

        logger.info("Setting up database engine and session factory")
        main_config = config or get_config()
        db_config = main_config.database

        logger.info("Configuring database engine for environment: {}", main_config.app.environment)
        engine_kwargs = {
            "pool_pre_ping": True,  # Validate connections before use
            "echo": db_config.echo,
            "echo_pool": False,
            "connect_args": self._get_connect_args(main_config),
        }

        if self._is_memory_sqlite(db_config.url):
            # One shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

        # In-memory SQLite shares one connection, so sessions cannot each BEGIN
        if db_config.is_sqlite and not self._is_memory_sqlite(db_config.url):
            self._configure_sqlite_transactions(self._engine)

        if main_config.app.environment == "production":
            logger.info(
                "Database engine initialized",
                extra={
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                },
            )

    @property
    def engine(self) -> Engine:
        return self._engine

    @staticmethod
    def _is_memory_sqlite(url: str) -> bool:
        return url in ("sqlite://", "sqlite:///:memory:")

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if config.database.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,  # Connections move between worker threads
                    "timeout": config.database.lock_timeout,
                }
            )

            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
        else:
            connect_args.update(
                {
                    "application_name": f"{config.app.environment}_bookshelf",
                    "connect_timeout": 30,
                }
            )

        return connect_args

    @staticmethod
    def _configure_sqlite_transactions(engine: Engine) -> None:
        """Make every SQLite transaction take the write lock up front.

        pysqlite defers BEGIN until the first write, so two writers that both
        read first can deadlock on lock promotion. BEGIN IMMEDIATE makes them
        queue on the lock timeout instead.
        """

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Entities are read after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """One unit of work: commit on success, roll back and re-raise on failure."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise
        except Exception as e:
            db.rollback()
            logger.debug("Transaction rolled back: {}", type(e).__name__)
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Close every pooled connection."""
        logger.info("Disposing database engine")
        self._engine.dispose()
