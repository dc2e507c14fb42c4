import asyncio
import json
import logging
from typing import Annotated, Any, Dict

import pytest
from pydantic import BaseModel, Field

from sample_users_mcp.core.exceptions import (
    ContractViolationError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolValidationError,
)
from sample_users_mcp.catalog import GetUserResult
from sample_users_mcp.core.tools import ContractFactory, ToolDispatcher, ToolRegistry, UnknownFieldPolicy
from sample_users_mcp.data import User


class Total(BaseModel):
    total: int


def make_registry() -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool
    def add(
        a: Annotated[int, Field(description="First addend")],
        b: Annotated[int, Field(description="Second addend")],
    ) -> Total:
        """Add two integers."""
        return Total(total=a + b)

    @registry.tool
    def leaky() -> Total:
        """A tool that fails with sensitive details."""
        raise ValueError("DB_PASSWORD=secret123")

    @registry.tool
    def wrong_shape() -> Total:
        """Returns something that is not a Total."""
        return {"total": "three", "unexpected": True}  # type: ignore[return-value]

    @registry.tool
    async def slow() -> Total:
        """Sleeps longer than the timeout."""
        await asyncio.sleep(2)
        return Total(total=0)

    @registry.tool
    async def async_add(a: Annotated[int, Field(description="Addend")]) -> Total:
        """Async tool."""
        return Total(total=a + 1)

    return registry


@pytest.mark.asyncio
async def test_invoke_success_produces_both_representations() -> None:
    dispatcher = ToolDispatcher(make_registry())

    result = await dispatcher.invoke("add", {"a": 2, "b": 3})

    assert result.name == "add"
    assert result.structured == {"total": 5}
    assert json.loads(result.textual) == result.structured
    assert result.call_id


@pytest.mark.asyncio
async def test_invoke_async_executor() -> None:
    dispatcher = ToolDispatcher(make_registry())
    result = await dispatcher.invoke("async_add", {"a": 1})
    assert result.structured == {"total": 2}


@pytest.mark.asyncio
async def test_unknown_tool() -> None:
    dispatcher = ToolDispatcher(make_registry())

    with pytest.raises(ToolNotFoundError) as exc_info:
        await dispatcher.invoke("subtract", {})

    assert exc_info.value.tool_name == "subtract"
    assert exc_info.value.stage == "received"


@pytest.mark.asyncio
async def test_validation_reports_every_violation() -> None:
    dispatcher = ToolDispatcher(make_registry())

    with pytest.raises(ToolValidationError) as exc_info:
        await dispatcher.invoke("add", {"a": "2", "c": 1})

    fields = {v["field"]: v["type"] for v in exc_info.value.violations}
    assert fields == {"a": "int_type", "b": "missing", "c": "extra_forbidden"}
    assert exc_info.value.stage == "resolved"


@pytest.mark.asyncio
async def test_validation_rejects_non_mapping_arguments() -> None:
    dispatcher = ToolDispatcher(make_registry())

    with pytest.raises(ToolValidationError) as exc_info:
        await dispatcher.invoke("add", "a=1&b=2")  # type: ignore[arg-type]

    assert exc_info.value.violations[0]["field"] == "(root)"


@pytest.mark.asyncio
async def test_none_arguments_mean_no_arguments() -> None:
    dispatcher = ToolDispatcher(make_registry())

    with pytest.raises(ToolValidationError) as exc_info:
        await dispatcher.invoke("add", None)

    assert {v["field"] for v in exc_info.value.violations} == {"a", "b"}


@pytest.mark.asyncio
async def test_ignore_policy_drops_unknown_fields() -> None:
    dispatcher = ToolDispatcher(make_registry(), unknown_fields="ignore")
    assert dispatcher.unknown_fields is UnknownFieldPolicy.IGNORE

    result = await dispatcher.invoke("add", {"a": 1, "b": 1, "typo": 5})

    assert result.structured == {"total": 2}


@pytest.mark.asyncio
async def test_executor_fault_is_sanitized_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    dispatcher = ToolDispatcher(make_registry())

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ToolExecutionError) as exc_info:
            await dispatcher.invoke("leaky", {})

    assert "DB_PASSWORD" not in str(exc_info.value)
    assert "An internal error occurred" in str(exc_info.value)
    assert exc_info.value.tool_name == "leaky"
    assert "DB_PASSWORD=secret123" in caplog.text
    assert "Unexpected error executing tool 'leaky'" in caplog.text


@pytest.mark.asyncio
async def test_executor_timeout() -> None:
    dispatcher = ToolDispatcher(make_registry(), tool_timeout=0.05)

    with pytest.raises(ToolExecutionError, match="timed out"):
        await dispatcher.invoke("slow", {})


@pytest.mark.asyncio
async def test_contract_violation_is_not_coerced(caplog: pytest.LogCaptureFixture) -> None:
    dispatcher = ToolDispatcher(make_registry())

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ContractViolationError) as exc_info:
            await dispatcher.invoke("wrong_shape", {})

    assert exc_info.value.code == "contract_violation"
    assert exc_info.value.stage == "executed"
    assert [v["field"] for v in exc_info.value.violations] == ["total"]
    assert "broke its output contract" in caplog.text


@pytest.mark.asyncio
async def test_first_invocation_freezes_registry() -> None:
    registry = make_registry()
    dispatcher = ToolDispatcher(registry)
    assert not registry.frozen

    await dispatcher.invoke("add", {"a": 1, "b": 2})

    assert registry.frozen

    def late() -> Total:
        """Registered too late."""
        return Total(total=0)

    with pytest.raises(ToolRegistrationError):
        registry.register(late)


@pytest.mark.asyncio
async def test_handle_success_envelope() -> None:
    dispatcher = ToolDispatcher(make_registry())

    response = await dispatcher.handle("add", {"a": 1, "b": 2})
    wire: Dict[str, Any] = response.to_wire()

    assert wire["isError"] is False
    assert wire["structuredContent"] == {"total": 3}
    assert wire["content"] == [{"type": "text", "text": json.dumps({"total": 3}, indent=2, sort_keys=True)}]
    assert "error" not in wire


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool_name, arguments, code",
    [
        ("nope", {}, "unknown_tool"),
        ("add", {}, "validation_failed"),
        ("leaky", {}, "tool_execution_error"),
        ("wrong_shape", {}, "contract_violation"),
    ],
)
async def test_handle_converts_every_error_kind(tool_name: str, arguments: Dict[str, Any], code: str) -> None:
    dispatcher = ToolDispatcher(make_registry())

    response = await dispatcher.handle(tool_name, arguments)

    assert response.is_error is True
    assert response.structured_content is None
    assert response.error is not None
    assert response.error.code == code
    assert response.content[0].text.startswith(response.error.message)


@pytest.mark.asyncio
async def test_handle_validation_envelope_lists_violations() -> None:
    dispatcher = ToolDispatcher(make_registry())

    response = await dispatcher.handle("add", {"a": 1})

    assert response.error is not None
    assert [v.field for v in response.error.violations or []] == ["b"]
    assert "- b: Field required" in response.content[0].text


@pytest.mark.asyncio
async def test_contract_violation_details_stay_server_side() -> None:
    dispatcher = ToolDispatcher(make_registry())

    response = await dispatcher.handle("wrong_shape", {})

    assert response.error is not None
    assert response.error.violations is None
    assert "three" not in response.content[0].text


@pytest.mark.asyncio
async def test_cancellation_propagates() -> None:
    dispatcher = ToolDispatcher(make_registry(), tool_timeout=5.0)

    task = asyncio.create_task(dispatcher.handle("slow", {}))
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_concurrent_invocations_are_independent() -> None:
    dispatcher = ToolDispatcher(make_registry())

    results = await asyncio.gather(*(dispatcher.invoke("add", {"a": i, "b": i}) for i in range(10)))

    assert [r.structured["total"] for r in results] == [2 * i for i in range(10)]
    assert len({r.call_id for r in results}) == 10


@pytest.mark.asyncio
async def test_explicit_input_contract_rejects_coercion_and_unknown_fields() -> None:
    registry = ToolRegistry()
    registry.register(
        "echo",
        description="Echo a number.",
        func=lambda n: Total(total=n),
        input_model=ContractFactory.from_fields("EchoInput", {"n": int}),
        output_model=Total,
    )
    dispatcher = ToolDispatcher(registry)

    response = await dispatcher.handle("echo", {"n": "5", "typo": 1})

    assert response.error is not None
    assert response.error.code == "validation_failed"
    assert {(v.field, v.type) for v in response.error.violations or []} == {
        ("n", "int_type"),
        ("typo", "extra_forbidden"),
    }


def result_registry() -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool
    def mutated() -> Total:
        """Returns a model instance changed after validation."""
        result = Total(total=1)
        result.total = "not-an-int"  # type: ignore[assignment]
        return result

    @registry.tool
    def unserializable() -> Total:
        """Returns an instance built without validation."""
        return Total.model_construct(total=object())

    @registry.tool
    def inconsistent_user() -> GetUserResult:
        """Claims a user was found without returning one."""
        return GetUserResult.model_construct(found=True, user=None)

    @registry.tool
    def found_user() -> GetUserResult:
        """Returns a consistent lookup."""
        return GetUserResult(found=True, user=User(id="u1", full_name="Ada"))

    return registry


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", ["mutated", "unserializable", "inconsistent_user"])
async def test_returned_instances_are_revalidated(tool_name: str) -> None:
    dispatcher = ToolDispatcher(result_registry())

    response = await dispatcher.handle(tool_name, {})

    assert response.is_error is True
    assert response.structured_content is None
    assert response.error is not None
    assert response.error.code == "contract_violation"


@pytest.mark.asyncio
async def test_valid_instances_pass_revalidation() -> None:
    dispatcher = ToolDispatcher(result_registry())

    result = await dispatcher.invoke("found_user", {})

    assert result.structured == {"found": True, "user": {"id": "u1", "fullName": "Ada"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", [["add"], {"name": "add"}, None, 42])
async def test_non_string_tool_name_is_unknown_tool(tool_name: Any) -> None:
    dispatcher = ToolDispatcher(make_registry())

    response = await dispatcher.handle(tool_name, {})

    assert response.error is not None
    assert response.error.code == "unknown_tool"
