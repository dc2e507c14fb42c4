"""Output contracts of the sample tools."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..data.models import Order, User

# Executors build these by field name; clients see the aliases.
RESULT_CONFIG = ConfigDict(extra="forbid", strict=True, populate_by_name=True)


class ListUsersResult(BaseModel):
    model_config = RESULT_CONFIG

    users: List[User]


class GetUserResult(BaseModel):
    """``user`` is null exactly when ``found`` is false."""

    model_config = RESULT_CONFIG

    found: bool
    user: Optional[User]

    @model_validator(mode="after")
    def _found_matches_user(self) -> "GetUserResult":
        if self.found != (self.user is not None):
            raise ValueError("found must be true exactly when user is present")
        return self


class ListOrdersResult(BaseModel):
    model_config = RESULT_CONFIG

    orders: List[Order]


class UserOrdersResult(BaseModel):
    model_config = RESULT_CONFIG

    user_exists: bool = Field(alias="userExists")
    orders: List[Order]


class SearchOrdersResult(BaseModel):
    model_config = RESULT_CONFIG

    count: int
    results: List[Order]
