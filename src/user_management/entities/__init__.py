"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .user import CreateUserRequest, User, UserRepository, UserTable

__all__ = [
    "CreateUserRequest",
    "User",
    "UserTable",
    "UserRepository",
]
