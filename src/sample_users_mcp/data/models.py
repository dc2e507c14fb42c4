"""Records held by the dataset. They double as parts of the tools' output contracts."""

from pydantic import BaseModel, ConfigDict, Field

RECORD_CONFIG = ConfigDict(frozen=True, extra="forbid", strict=True, populate_by_name=True)


class User(BaseModel):
    """
    A customer.

    Attributes:
        id: Opaque user identifier.
        full_name: Display name, serialized as ``fullName``.
    """

    model_config = RECORD_CONFIG

    id: str
    full_name: str = Field(alias="fullName")


class Order(BaseModel):
    """
    An order placed by a user.

    Attributes:
        id: Opaque order identifier.
        name: Product description, e.g. "Sugar (50kg)".
        user_id: Owning user, serialized as ``userId``.
    """

    model_config = RECORD_CONFIG

    id: str
    name: str
    user_id: str = Field(alias="userId")
