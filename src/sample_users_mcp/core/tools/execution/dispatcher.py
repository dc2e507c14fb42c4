"""Invocation dispatcher: resolve, validate, execute, check and package a tool call."""

from __future__ import annotations

import asyncio
import inspect
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from .envelope import ToolResponse, error_envelope, success_envelope
from ..models import InvocationResult, ToolCallRequest, ToolDefinition
from ..registry import ToolListing, ToolRegistry
from ..schema import SchemaValidator
from ..schema.schema_validator import ROOT_FIELD
from ...exceptions import ContractViolationError, ToolError, ToolExecutionError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class InvocationStage(str, Enum):
    """Forward-only stages of a single invocation."""

    RECEIVED = "received"
    RESOLVED = "resolved"
    VALIDATED = "validated"
    EXECUTED = "executed"
    RESULT_VALIDATED = "result_validated"
    COMPLETED = "completed"


class UnknownFieldPolicy(str, Enum):
    """What to do with argument keys the input contract does not declare."""

    REJECT = "reject"
    IGNORE = "ignore"


class ToolDispatcher:
    """Runs tool invocations against a ToolRegistry.

    ``invoke`` raises one of the typed dispatch errors; ``handle`` is the
    transport entry point and always returns an envelope. The registry is
    frozen when the first invocation is accepted.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        tool_timeout: float = 30.0,
        unknown_fields: UnknownFieldPolicy | str = UnknownFieldPolicy.REJECT,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Tool registry used to resolve tool definitions.
            tool_timeout: Timeout in seconds for a single executor run.
            unknown_fields: Policy for undeclared argument keys. Defaults to rejecting them.
        """
        self._registry = registry
        self._tool_timeout = tool_timeout
        self._unknown_fields = UnknownFieldPolicy(unknown_fields)

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def unknown_fields(self) -> UnknownFieldPolicy:
        return self._unknown_fields

    def list_tools(self) -> ToolListing:
        return self._registry.list_tools()

    async def handle(self, tool_name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        """Invoke a tool and wrap the outcome in a response envelope.

        No dispatch error escapes this method; cancellation does.
        """
        try:
            result = await self.invoke(tool_name, arguments)
        except ToolError as exc:
            return error_envelope(exc)
        return success_envelope(result)

    async def invoke(self, tool_name: str, arguments: Optional[Mapping[str, Any]]) -> InvocationResult:
        """Run one invocation as a single forward pass.

        Args:
            tool_name: Name of the tool to call.
            arguments: Raw, untrusted arguments. ``None`` means no arguments.

        Returns:
            The structured result together with its canonical text rendering.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            ToolValidationError: If the arguments break the input contract.
            ToolExecutionError: If the executor fails or times out.
            ContractViolationError: If the executor's result breaks the output contract.
        """
        if not self._registry.frozen:
            self._registry.freeze()
        request = ToolCallRequest(name=tool_name, arguments=arguments)
        logger.debug("Invocation %s received for tool '%s'.", request.call_id, tool_name)

        try:
            tool_def = self._registry.lookup(tool_name)
        except ToolError as exc:
            exc.stage = InvocationStage.RECEIVED.value
            logger.warning("Invocation %s: unknown tool '%s'.", request.call_id, tool_name)
            raise
        self._advance(request, InvocationStage.RESOLVED)

        validated_args = self._validate_arguments(tool_def, request)
        self._advance(request, InvocationStage.VALIDATED)

        raw_result = await self._execute(tool_def, validated_args, request)
        self._advance(request, InvocationStage.EXECUTED)

        structured = self._validate_result(tool_def, raw_result, request)
        self._advance(request, InvocationStage.RESULT_VALIDATED)

        result = InvocationResult.from_structured(tool_def.name, structured, request.call_id)
        self._advance(request, InvocationStage.COMPLETED)
        return result

    def _validate_arguments(self, tool_def: ToolDefinition, request: ToolCallRequest) -> Dict[str, Any]:
        """Check raw arguments against the input contract.

        Returns:
            Keyword arguments for the executor, keyed by parameter name.
        """
        raw_args: Any = request.arguments
        if raw_args is None:
            raw_args = {}

        if isinstance(raw_args, Mapping) and self._unknown_fields is UnknownFieldPolicy.IGNORE:
            declared = self._declared_keys(tool_def.input_model)
            raw_args = {key: value for key, value in raw_args.items() if key in declared}

        try:
            validated = SchemaValidator.validate_payload(tool_def.input_model, raw_args)
        except ValidationError as exc:
            violations = SchemaValidator.describe_errors(exc)
            msg = f"Invalid arguments for tool '{tool_def.name}'."
            logger.warning(
                "Invocation %s: argument validation failed for '%s': %s", request.call_id, tool_def.name, violations
            )
            raise ToolValidationError(
                msg,
                violations=violations,
                tool_name=tool_def.name,
                stage=InvocationStage.RESOLVED.value,
            ) from exc

        # Shallow: nested contract models reach the executor as model instances.
        return dict(validated)

    async def _execute(self, tool_def: ToolDefinition, function_args: Dict[str, Any], request: ToolCallRequest) -> Any:
        """Execute the tool function, handling async/sync and timeouts.

        Raises:
            ToolExecutionError: If the executor raises or times out. The message never
                contains the underlying exception; that is only logged.
        """
        try:
            if inspect.iscoroutinefunction(tool_def.func):
                return await asyncio.wait_for(tool_def.func(**function_args), timeout=self._tool_timeout)

            return await asyncio.wait_for(
                asyncio.to_thread(tool_def.func, **function_args),
                timeout=self._tool_timeout,
            )

        except asyncio.TimeoutError as exc:
            msg = f"Tool '{tool_def.name}' timed out after {self._tool_timeout} seconds."
            logger.error("Invocation %s: %s", request.call_id, msg)
            raise ToolExecutionError(msg, tool_name=tool_def.name, stage=InvocationStage.VALIDATED.value) from exc

        except Exception as exc:
            logger.error(
                "Invocation %s: Unexpected error executing tool '%s': %s",
                request.call_id,
                tool_def.name,
                exc,
                exc_info=True,
            )
            raise ToolExecutionError(
                f"An internal error occurred while executing tool '{tool_def.name}'.",
                tool_name=tool_def.name,
                stage=InvocationStage.VALIDATED.value,
            ) from exc

    def _validate_result(self, tool_def: ToolDefinition, raw_result: Any, request: ToolCallRequest) -> Dict[str, Any]:
        """Check the executor's return value against the output contract.

        Returns:
            The result in JSON form with wire (alias) field names.
        """
        try:
            validated = SchemaValidator.validate_payload(tool_def.output_model, raw_result)
            return validated.model_dump(mode="json", by_alias=True)
        except (ValidationError, PydanticSerializationError) as exc:
            if isinstance(exc, ValidationError):
                violations = SchemaValidator.describe_errors(exc)
            else:
                violations = [{"field": ROOT_FIELD, "message": str(exc), "type": "serialization_error"}]
            logger.error(
                "Invocation %s: tool '%s' broke its output contract: %s", request.call_id, tool_def.name, violations
            )
            raise ContractViolationError(
                f"Tool '{tool_def.name}' produced an invalid result.",
                violations=violations,
                tool_name=tool_def.name,
                stage=InvocationStage.EXECUTED.value,
            ) from exc

    @staticmethod
    def _declared_keys(model: type[BaseModel]) -> set[str]:
        keys = set()
        for name, field in model.model_fields.items():
            keys.add(field.alias or name)
        return keys

    @staticmethod
    def _advance(request: ToolCallRequest, stage: InvocationStage) -> None:
        logger.debug("Invocation %s for '%s' -> %s", request.call_id, request.name, stage.value)
