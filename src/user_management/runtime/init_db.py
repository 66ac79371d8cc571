"""Database initialization script."""

from src.user_management.core.services.database.db_session import DbSessionService
from src.user_management.runtime.context import get_config


def init_db() -> None:
    """Create all database tables."""
    DbSessionService(get_config()).create_all()


if __name__ == "__main__":
    init_db()
