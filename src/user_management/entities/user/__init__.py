"""User entity module.

This module contains all User-related classes organized by responsibility:
- User / CreateUserRequest: Domain entity and request model
- UserTable: Database persistence model
- UserRepository: Data access layer
"""

from .entity import CreateUserRequest, User
from .repository import UserRepository
from .table import UserTable

__all__ = ["CreateUserRequest", "User", "UserTable", "UserRepository"]
