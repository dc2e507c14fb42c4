"""Bootstrap for the five read-only tools over the users/orders dataset."""

from typing import Annotated

from pydantic import Field

from .models import GetUserResult, ListOrdersResult, ListUsersResult, SearchOrdersResult, UserOrdersResult
from ..core.logger import get_logger
from ..core.tools import ToolRegistry
from ..data import Dataset

logger = get_logger(__name__)


def register_sample_tools(registry: ToolRegistry, dataset: Dataset) -> ToolRegistry:
    """Register list_users, get_user, list_orders, list_orders_for_user and search_orders.

    Every executor closes over ``dataset``; none of them touches global state.

    Args:
        registry: The registry to populate. Must not be frozen yet.
        dataset: Read accessor the executors query.

    Returns:
        The same registry, for chaining.
    """

    @registry.tool(title="List Users")
    def list_users() -> ListUsersResult:
        """List all users (id, fullName)."""
        return ListUsersResult(users=list(dataset.list_users()))

    @registry.tool(title="Get User")
    def get_user(
        user_id: Annotated[str, Field(alias="id", description="Id of the user to fetch.")],
    ) -> GetUserResult:
        """Get a single user by id."""
        lookup = dataset.get_user(user_id)
        return GetUserResult(found=lookup.found, user=lookup.value)

    @registry.tool(title="List Orders")
    def list_orders() -> ListOrdersResult:
        """List all orders."""
        return ListOrdersResult(orders=list(dataset.list_orders()))

    @registry.tool(title="List Orders for User")
    def list_orders_for_user(
        user_id: Annotated[str, Field(alias="userId", description="Id of the user whose orders to list.")],
    ) -> UserOrdersResult:
        """List orders by userId."""
        exists = dataset.has_user(user_id)
        orders = list(dataset.orders_for_user(user_id)) if exists else []
        return UserOrdersResult(user_exists=exists, orders=orders)

    @registry.tool(title="Search Orders")
    def search_orders(
        q: Annotated[str, Field(min_length=1, description="Case-insensitive substring of the order name.")],
    ) -> SearchOrdersResult:
        """Search orders by name (case-insensitive substring)."""
        results = list(dataset.search_orders(q))
        return SearchOrdersResult(count=len(results), results=results)

    logger.debug("Registered sample tools: %s", ", ".join(registry.tools))
    return registry


def build_sample_registry(dataset: Dataset | None = None) -> ToolRegistry:
    """A fresh registry holding the sample tools, over ``dataset`` or the built-in sample data."""
    return register_sample_tools(ToolRegistry(), dataset if dataset is not None else Dataset.sample())
