"""Tool registry and its discovery listing."""

import inspect
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Type, Union, overload

from pydantic import BaseModel, ValidationError

from ..models import ToolDefinition, ToolDescriptor
from ..schema import ContractFactory, SchemaValidator
from ...exceptions import (
    DuplicateToolError,
    InvalidToolDefinitionError,
    ToolNotFoundError,
    ToolRegistrationError,
)
from ...logger import get_logger

logger = get_logger(__name__)


class ToolListing:
    """Restartable, registration-ordered view over tool descriptors.

    Descriptors are rendered on iteration, so each pass produces fresh values
    and iterating twice yields the same sequence.
    """

    def __init__(self, tools: Tuple[ToolDefinition, ...]) -> None:
        self._tools = tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        for tool in self._tools:
            yield tool.describe()

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]


class ToolRegistry:
    """
    A central registry to manage and access all available tools.

    The registry is populated during start-up and then frozen; once frozen it
    is read-only and can be shared by concurrent invocations without locking.
    Mutations before that point are serialized by an internal lock.
    """

    def __init__(self) -> None:
        """Initialize the ToolRegistry."""
        self._tools: Dict[str, ToolDefinition] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def tools(self) -> Mapping[str, ToolDefinition]:
        """Read-only mapping of tool name to definition, in registration order."""
        return MappingProxyType(self._tools)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Close the registration phase. Further register/unregister calls fail."""
        with self._lock:
            if not self._frozen:
                self._frozen = True
                logger.info("Tool registry frozen with %d tool(s).", len(self._tools))

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable[..., Any]],
        description: Optional[str] = None,
        func: Optional[Callable[..., Any]] = None,
        input_model: Optional[Type[BaseModel]] = None,
        output_model: Optional[Type[BaseModel]] = None,
        title: Optional[str] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        A tool can be registered by passing a ready `ToolDefinition`, by passing
        the individual components, or by passing a function whose annotated
        signature and return type describe the contracts.

        Args:
            name_or_tool: Either a `ToolDefinition` object, the name of the tool (str), or a Callable.
            description: What the tool does. Taken from the docstring when omitted.
            func: The executor. Required if `name_or_tool` is a string.
            input_model: Input contract. Inferred from the executor's signature when omitted.
            output_model: Output contract. Inferred from the executor's return annotation when omitted.
            title: Optional display name.

        Returns:
            The definition as stored in the registry.

        Raises:
            DuplicateToolError: If a tool with the same name already exists.
            InvalidToolDefinitionError: If the definition or its contracts are malformed.
            ToolRegistrationError: If the registry is already frozen.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(
                name_or_tool,
                description=description,
                input_model=input_model,
                output_model=output_model,
                title=title,
            )
        elif isinstance(name_or_tool, str):
            if func is None:
                raise InvalidToolDefinitionError("If passing name as string, func is required.")
            tool = self._generate_tool_definition(
                func,
                name=name_or_tool,
                description=description,
                input_model=input_model,
                output_model=output_model,
                title=title,
            )
        else:
            raise InvalidToolDefinitionError(f"Cannot register object of type {type(name_or_tool).__name__}.")

        # Renders both schemas once; recursive contracts fail here, before any state changes.
        try:
            tool.describe()
        except (TypeError, ValueError) as e:
            msg = f"Cannot render the contracts of tool '{tool.name}': {e}"
            logger.error(msg)
            raise InvalidToolDefinitionError(msg, tool_name=tool.name) from e

        with self._lock:
            if self._frozen:
                msg = f"Cannot register tool '{tool.name}': the registry is frozen."
                logger.error(msg)
                raise ToolRegistrationError(msg, tool_name=tool.name)

            if tool.name in self._tools:
                msg = f"Tool '{tool.name}' is already registered."
                logger.error(msg)
                raise DuplicateToolError(msg, tool_name=tool.name)

            self._tools[tool.name] = tool

        logger.info(f"Successfully registered tool: '{tool.name}'")
        return tool

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Args:
            tool_name: The name of the tool to remove.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
            ToolRegistrationError: If the registry is already frozen.
        """
        with self._lock:
            if self._frozen:
                raise ToolRegistrationError(
                    f"Cannot unregister tool '{tool_name}': the registry is frozen.", tool_name=tool_name
                )
            if tool_name not in self._tools:
                raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.", tool_name=tool_name)
            del self._tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def lookup(self, tool_name: str) -> ToolDefinition:
        """Return the definition registered under `tool_name`.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        tool = self._tools.get(tool_name) if isinstance(tool_name, str) else None
        if tool is None:
            raise ToolNotFoundError(f"Unknown tool: {tool_name!r}.", tool_name=str(tool_name))
        return tool

    def list_tools(self) -> ToolListing:
        """Descriptors of all registered tools, in registration order."""
        return ToolListing(tuple(self._tools.values()))

    def __contains__(self, tool_name: object) -> bool:
        return isinstance(tool_name, str) and tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @overload
    def tool(self, func: Callable[..., Any]) -> Callable[..., Any]: ...

    @overload
    def tool(
        self,
        func: None = None,
        *,
        name: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        output_model: Optional[Type[BaseModel]] = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]: ...

    def tool(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        name: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        output_model: Optional[Type[BaseModel]] = None,
    ) -> Any:
        """A decorator to turn a function into a tool.

        Usable bare (``@registry.tool``) or with options
        (``@registry.tool(title="Get User")``).

        Returns:
            The original function, after registering it as a tool.
        """

        def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
            self.register(
                name if name is not None else f.__name__,
                description=description,
                func=f,
                output_model=output_model,
                title=title,
            )
            return f

        if func is not None:
            return decorator(func)
        return decorator

    def _generate_tool_definition(
        self,
        func: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        input_model: Optional[Type[BaseModel]] = None,
        output_model: Optional[Type[BaseModel]] = None,
        title: Optional[str] = None,
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable function.

        Args:
            func: The function to generate a definition for.
            name: Optional name override for the tool.
            description: Optional description override for the tool.
            input_model: Optional explicit input contract.
            output_model: Optional explicit output contract.
            title: Optional display name.

        Returns:
            A ToolDefinition object containing the tool's metadata and contracts.

        Raises:
            InvalidToolDefinitionError: If the function is missing a docstring, parameter
                descriptions or an output contract, or if the parts do not validate.
        """
        tool_name = name if name is not None else getattr(func, "__name__", "")
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)
        if input_model is None:
            input_model = ContractFactory.from_signature(func, tool_name)
        if output_model is None:
            output_model = ContractFactory.output_from_signature(func, tool_name)

        try:
            return ToolDefinition(
                name=tool_name,
                description=description,
                func=func,
                input_model=input_model,
                output_model=output_model,
                title=title,
            )
        except ValidationError as e:
            violations = SchemaValidator.describe_errors(e)
            msg = f"Invalid definition for tool '{tool_name}': " + "; ".join(
                f"{v['field']}: {v['message']}" for v in violations
            )
            logger.error(msg)
            raise InvalidToolDefinitionError(msg, tool_name=tool_name) from e

    @staticmethod
    def _get_docstring_from_func(func: Callable[..., Any], tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. Clients need a description of what the tool does."
            logger.error(msg)
            raise InvalidToolDefinitionError(msg, tool_name=tool_name)
        return doc
