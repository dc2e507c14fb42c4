import inspect
from typing import Any, Annotated, Callable, Dict, Mapping, Type, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic.fields import FieldInfo

from ...exceptions import InvalidToolDefinitionError
from ...logger import get_logger

logger = get_logger(__name__)

# Contracts never coerce: "1" is not an int and unknown keys are errors.
CONTRACT_CONFIG = ConfigDict(extra="forbid", strict=True)


class FieldTuple(BaseModel):
    """Ensures, that the dynamic model field definition is correctly typed for Pydantic's create_model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotation: Any
    field: FieldInfo


class ContractFactory:
    """Builds contract models, either from plain field specs or from an executor's signature."""

    @classmethod
    def from_fields(cls, model_name: str, fields: Mapping[str, Any]) -> Type[BaseModel]:
        """Create a contract model from a mapping of field name to type spec.

        Each value is either a bare type (a required field) or a tuple of
        ``(type, default_or_FieldInfo)``.

        Args:
            model_name: Name of the generated model class.
            fields: Field specs keyed by field name.

        Returns:
            A strict pydantic model that rejects unknown fields.

        Raises:
            InvalidToolDefinitionError: If the field specs cannot form a model.
        """
        definitions: Dict[str, Any] = {}
        for field_name, spec in fields.items():
            if isinstance(spec, tuple):
                if len(spec) != 2:
                    raise InvalidToolDefinitionError(
                        f"Field '{field_name}' of contract '{model_name}' must be a type or a (type, default) pair."
                    )
                definitions[field_name] = spec
            else:
                definitions[field_name] = (spec, ...)
        return cls._create(model_name, definitions)

    @classmethod
    def from_signature(cls, func: Callable[..., Any], tool_name: str) -> Type[BaseModel]:
        """Create the input contract of a tool from its executor's signature.

        Args:
            func: The executor.
            tool_name: The name of the tool for error reporting and model naming.

        Returns:
            A strict pydantic model with one field per parameter.
        """
        signature = inspect.signature(func)
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                msg = f"Tool '{tool_name}' uses *args/**kwargs; every argument must be a named parameter."
                logger.error(msg)
                raise InvalidToolDefinitionError(msg)
            ft = cls.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return cls._create(f"{tool_name}Input", fields)

    @staticmethod
    def output_from_signature(func: Callable[..., Any], tool_name: str) -> Type[BaseModel]:
        """Read the output contract from an executor's return annotation.

        Raises:
            InvalidToolDefinitionError: If the return annotation is not a pydantic model.
        """
        annotation = inspect.signature(func).return_annotation
        if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
            return annotation
        msg = (
            f"Tool '{tool_name}' needs an output contract. "
            "Annotate the return type with a pydantic model or pass output_model explicitly."
        )
        logger.error(msg)
        raise InvalidToolDefinitionError(msg)

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Creates the tuple of (annotation, FieldInfo) for a single function parameter.

        Args:
            param_name: The name of the parameter.
            param: The inspect.Parameter object.
            tool_name: The name of the tool for error reporting.

        Returns:
            A FieldTuple containing the type annotation and Pydantic Field configuration.
        """
        annotation = param.annotation
        description = cls._extract_description(annotation=annotation, param_name=param_name, tool_name=tool_name)

        pydantic_default = param.default if param.default is not inspect.Parameter.empty else ...

        # Alias and constraints stay on the Annotated metadata; pydantic merges both FieldInfos.
        return FieldTuple(annotation=annotation, field=Field(default=pydantic_default, description=description))

    @staticmethod
    def _extract_description(annotation: Any, param_name: str, tool_name: str) -> str:
        """Every tool parameter needs 'Annotated[<class>, Field(description='...')]' as its annotation.

        Args:
            annotation: The type annotation to inspect.
            param_name: The name of the parameter being checked.
            tool_name: The name of the tool for error reporting.

        Raises:
            InvalidToolDefinitionError: If the parameter is missing a Pydantic Field description.
        """
        if get_origin(annotation) is Annotated:
            for metadata in get_args(annotation):
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')]"
        )
        logger.error(msg)
        raise InvalidToolDefinitionError(msg)

    @staticmethod
    def _create(model_name: str, definitions: Dict[str, Any]) -> Type[BaseModel]:
        try:
            return create_model(model_name, __config__=CONTRACT_CONFIG, **definitions)
        except (TypeError, ValueError, NameError) as e:
            msg = f"Could not build contract '{model_name}': {e}"
            logger.error(msg)
            raise InvalidToolDefinitionError(msg) from e
