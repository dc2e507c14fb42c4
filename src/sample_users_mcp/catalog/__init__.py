"""The users/orders tool catalog."""

from .models import GetUserResult, ListOrdersResult, ListUsersResult, SearchOrdersResult, UserOrdersResult
from .tools import build_sample_registry, register_sample_tools

__all__ = [
    "GetUserResult",
    "ListOrdersResult",
    "ListUsersResult",
    "SearchOrdersResult",
    "UserOrdersResult",
    "build_sample_registry",
    "register_sample_tools",
]
