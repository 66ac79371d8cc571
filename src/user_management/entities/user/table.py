"""User database table model."""

from datetime import date

from sqlmodel import Field

from src.user_management.entities._base import EntityTable
from src.user_management.entities.user.entity import NAME_MAX_LENGTH


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database. The
    unique index on email is the authoritative duplicate guard.
    """

    __tablename__ = "users"

    first_name: str = Field(max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    email: str = Field(unique=True, index=True)
    date_of_birth: date
    phone_number: str
