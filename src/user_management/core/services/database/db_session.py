"""Database engine and session factory used across the application."""

from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlmodel import Session, SQLModel, create_engine

from src.user_management.runtime.config.config_data import ConfigData
from src.user_management.runtime.context import get_config


class DbSessionService:
    def __init__(self, config: ConfigData | None = None):
        """Initialize the shared database engine and session factory."""

        main_config = config or get_config()
        db_config = main_config.database

        logger.info(
            "Configuring database engine for environment: {}",
            main_config.app.environment,
        )
        engine_kwargs: dict[str, Any] = {
            # Logging - disable SQL echo for cleaner logs
            "echo": False,
            "echo_pool": False,
            "connect_args": self._get_connect_args(main_config),
        }

        if db_config.is_sqlite:
            if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
                # A single shared connection keeps the in-memory database alive
                engine_kwargs["poolclass"] = StaticPool
            if main_config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,  # Validate connections before use
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        logger.info("Database engine initialized for {} backend", self._engine.dialect.name)

    @property
    def engine(self):
        return self._engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}

        if config.database.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,  # Sessions are used from worker threads
                    "timeout": 20,  # Lock timeout
                }
            )
        elif "postgresql" in config.database.url:
            connect_args.update(
                {
                    # Application name for connection tracking
                    "application_name": f"{config.app.environment}_user_api",
                    "connect_timeout": 30,
                }
            )

        return connect_args

    def create_all(self) -> None:
        """Create all database tables."""
        from src.user_management.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Entities stay readable after commit
            autoflush=True,
        )

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
        logger.info("Database engine disposed")
