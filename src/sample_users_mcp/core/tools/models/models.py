from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..schema import SchemaValidator

TOOL_NAME_PATTERN = r"^[A-Za-z0-9_.\-]{1,128}$"


class ToolDescriptor(BaseModel):
    """
    Discovery view of a registered tool, as handed to transports and clients.

    Attributes:
        name: The unique name of the tool.
        title: Optional human-friendly display name.
        description: A brief description of what the tool does.
        input_schema: Resolved JSON schema of the tool's arguments.
        output_schema: Resolved JSON schema of the tool's structured result.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    title: Optional[str] = None
    description: str
    input_schema: Dict[str, Any]
    output_schema: Dict[str, Any]


class ToolDefinition(BaseModel):
    """
    Represents a tool that can be registered with a ToolRegistry.

    Definitions are immutable; the registry stores the exact instance it was
    given, so ``lookup`` hands back the same object.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The executor. Called with the validated arguments as keyword
              arguments; may be a plain function or a coroutine function.
        input_model: Pydantic model describing the accepted arguments.
        output_model: Pydantic model describing a successful result.
        title: Optional human-friendly display name.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(pattern=TOOL_NAME_PATTERN)
    description: str = Field(min_length=1)
    func: Callable[..., Any]
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    title: Optional[str] = None

    @field_validator("input_model")
    @classmethod
    def _closed_strict_input(cls, model: Type[BaseModel]) -> Type[BaseModel]:
        # Arguments are untrusted: no silent coercion and no dropped keys.
        config = model.model_config
        if config.get("extra") != "forbid" or config.get("strict") is not True:
            raise ValueError(
                f"input contract {model.__name__} must use ConfigDict(extra='forbid', strict=True); "
                "build it with ContractFactory.from_fields"
            )
        return model

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the input contract, with refs inlined and metadata stripped."""
        return SchemaValidator.resolve_model_schema(self.input_model)

    @property
    def output_schema(self) -> Dict[str, Any]:
        """JSON schema of the output contract. Nullable fields stay nullable."""
        return SchemaValidator.resolve_model_schema(self.output_model, keep_nullable=True)

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            title=self.title,
            description=self.description,
            input_schema=self.input_schema,
            output_schema=self.output_schema,
        )
