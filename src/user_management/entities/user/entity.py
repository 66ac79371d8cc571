"""User domain entity and request model."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from src.user_management.core.validation import compute_age
from src.user_management.entities._base import Entity

NAME_MAX_LENGTH = 128


class UserFields(BaseModel):
    """Fields a client supplies when creating or replacing a user.

    JSON uses camelCase keys; snake_case keys are accepted on input too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(
        min_length=1, max_length=NAME_MAX_LENGTH, description="User's first name"
    )
    last_name: str | None = Field(
        default=None, max_length=NAME_MAX_LENGTH, description="User's last name"
    )
    email: str = Field(min_length=1, description="User's email address, unique")
    date_of_birth: date = Field(description="User's date of birth")
    phone_number: str = Field(description="Ten digit phone number")


class CreateUserRequest(UserFields):
    """Request body for both creating and fully replacing a user."""


class User(UserFields, Entity):
    """User entity representing a person in the system.

    It inherits from Entity to get an auto-generated UUID identifier. The
    age is derived from the date of birth whenever the user is serialized.
    """

    @computed_field
    @property
    def age(self) -> int:
        return compute_age(self.date_of_birth, date.today())

    @classmethod
    def from_request(cls, request: CreateUserRequest, user_id: str | None = None) -> "User":
        """Build a user from request fields, keeping ``user_id`` when given."""
        data = request.model_dump()
        if user_id is not None:
            data["id"] = user_id
        return cls(**data)

    def __eq__(self, other: Any) -> bool:
        """Compare users by their persisted attributes."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.date_of_birth == other.date_of_birth
            and self.phone_number == other.phone_number
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.date_of_birth,
            self.phone_number,
        ))
