import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField


def new_entity_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier.

    Entities compare by identity: two instances are equal when their ids are
    equal, regardless of the other attributes.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = PydanticField(
        default_factory=new_entity_id,
        description="Unique identifier for the entity",
    )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity) or type(self) is not type(other):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
