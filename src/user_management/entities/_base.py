import uuid

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid.uuid4())


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier."""

    id: str = PydanticField(
        default_factory=new_id,
        description="Unique identifier for the entity",
    )


class EntityTable(SQLModel, table=False):
    """Base table class with auto-generated UUID primary key."""

    id: str = Field(
        primary_key=True,
        default_factory=new_id,
        description="Unique identifier for the entity",
    )
