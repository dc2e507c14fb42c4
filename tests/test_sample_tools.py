import json

import pytest

from sample_users_mcp.catalog import build_sample_registry
from sample_users_mcp.core.tools import ToolDispatcher, ToolRegistry
from sample_users_mcp.data import Dataset, Order, User


def test_sample_registry_lists_the_five_tools(sample_registry: ToolRegistry) -> None:
    names = sample_registry.list_tools().names()
    assert list(names) == ["list_users", "get_user", "list_orders", "list_orders_for_user", "search_orders"]


def test_sample_tool_descriptors(sample_registry: ToolRegistry) -> None:
    descriptors = {d.name: d for d in sample_registry.list_tools()}

    assert descriptors["list_users"].description == "List all users (id, fullName)."
    assert descriptors["list_users"].title == "List Users"
    assert descriptors["list_users"].input_schema == {"type": "object", "properties": {}, "additionalProperties": False}
    assert descriptors["get_user"].input_schema["required"] == ["id"]
    assert descriptors["list_orders_for_user"].input_schema["required"] == ["userId"]
    assert descriptors["search_orders"].input_schema["properties"]["q"]["minLength"] == 1
    assert "userExists" in descriptors["list_orders_for_user"].output_schema["properties"]


@pytest.mark.asyncio
async def test_list_users(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("list_users", {})

    users = result.structured["users"]
    assert len(users) == 10
    assert users[0] == {"id": "a1b2c3d4", "fullName": "Alice Johnson"}
    assert json.loads(result.textual) == result.structured


@pytest.mark.asyncio
async def test_get_user_found(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("get_user", {"id": "a1b2c3d4"})
    assert result.structured == {"found": True, "user": {"id": "a1b2c3d4", "fullName": "Alice Johnson"}}


@pytest.mark.asyncio
async def test_get_user_miss_is_not_an_error(dispatcher: ToolDispatcher) -> None:
    response = await dispatcher.handle("get_user", {"id": "zzzz"})

    assert response.is_error is False
    assert response.structured_content == {"found": False, "user": None}


@pytest.mark.asyncio
async def test_get_user_requires_id(dispatcher: ToolDispatcher) -> None:
    response = await dispatcher.handle("get_user", {})

    assert response.error is not None
    assert response.error.code == "validation_failed"
    assert [(v.field, v.type) for v in response.error.violations or []] == [("id", "missing")]


@pytest.mark.asyncio
async def test_list_orders(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("list_orders", {})

    orders = result.structured["orders"]
    assert len(orders) == 27
    assert orders[0] == {"id": "ord001", "name": "Sugar (50kg)", "userId": "a1b2c3d4"}


@pytest.mark.asyncio
async def test_list_orders_for_user(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("list_orders_for_user", {"userId": "a1b2c3d4"})

    assert result.structured["userExists"] is True
    assert [o["id"] for o in result.structured["orders"]] == ["ord001", "ord002", "ord003"]


@pytest.mark.asyncio
async def test_list_orders_for_unknown_user(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("list_orders_for_user", {"userId": "nobody"})
    assert result.structured == {"userExists": False, "orders": []}


@pytest.mark.asyncio
async def test_search_orders_is_case_insensitive(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("search_orders", {"q": "SUGAR"})

    assert result.structured["count"] == 1
    assert result.structured["results"][0]["name"] == "Sugar (50kg)"


@pytest.mark.asyncio
async def test_search_orders_count_matches_results(dispatcher: ToolDispatcher) -> None:
    result = await dispatcher.invoke("search_orders", {"q": "a"})
    assert result.structured["count"] == len(result.structured["results"])


@pytest.mark.asyncio
async def test_search_orders_rejects_empty_query(dispatcher: ToolDispatcher) -> None:
    response = await dispatcher.handle("search_orders", {"q": ""})

    assert response.error is not None
    assert response.error.code == "validation_failed"
    assert [v.field for v in response.error.violations or []] == ["q"]


@pytest.mark.asyncio
async def test_repeated_calls_are_identical(dispatcher: ToolDispatcher) -> None:
    first = await dispatcher.invoke("list_orders_for_user", {"userId": "e5f6g7h8"})
    second = await dispatcher.invoke("list_orders_for_user", {"userId": "e5f6g7h8"})

    assert first.structured == second.structured
    assert first.textual == second.textual
    assert first.call_id != second.call_id


@pytest.mark.asyncio
async def test_tools_read_the_given_dataset() -> None:
    dataset = Dataset([User(id="u1", full_name="Ada")], [Order(id="o1", name="Tea", user_id="u1")])
    dispatcher = ToolDispatcher(build_sample_registry(dataset))

    result = await dispatcher.invoke("list_users", {})

    assert result.structured == {"users": [{"id": "u1", "fullName": "Ada"}]}
