"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# User Services
from .user_service import UserService

__all__ = [
    "DbSessionService",
    "UserService",
]
