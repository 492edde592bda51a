from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class carrying the store-assigned integer identifier."""

    model_config = ConfigDict(from_attributes=True)

    id: int = PydanticField(description="Store-assigned identifier, never reused")


class EntityTable(SQLModel, table=False):
    """Base table class with an auto-incrementing integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Store-assigned identifier",
    )
