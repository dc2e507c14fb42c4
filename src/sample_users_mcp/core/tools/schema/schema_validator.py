from typing import Any, Dict, List, Set, Type

import jsonref  # type: ignore
from pydantic import BaseModel, ValidationError

from ...exceptions import InvalidToolDefinitionError
from ...logger import get_logger

logger = get_logger(__name__)

ROOT_FIELD = "(root)"


class SchemaValidator:
    """
    Helper class for checking contracts, rendering their JSON schemas and
    validating payloads against them.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.
        Raises InvalidToolDefinitionError if a cycle is detected.

        Args:
            schema: The JSON schema to check.

        Raises:
            InvalidToolDefinitionError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool contracts."
                        )
                        logger.error(msg)
                        raise InvalidToolDefinitionError(msg)

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any, keep_nullable: bool = False) -> Any:
        """
        Cleans up the schema for transport to clients.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null) unless keep_nullable is set.
        Enforces additionalProperties: false for objects.

        Args:
            schema: The JSON schema to sanitize.
            keep_nullable: Keep ``anyOf`` unions with ``null``. Output schemas need
                this, otherwise a legitimate ``null`` result would fail client-side
                validation.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        if "anyOf" in new_schema and not keep_nullable:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if x.get("type") != "null"]

            if len(non_null) == 1:
                simplified = non_null[0]

                if isinstance(simplified, dict):
                    # Parent description wins over the branch's own.
                    merged = simplified.copy()
                    if "description" in new_schema:
                        merged["description"] = new_schema["description"]
                    return SchemaValidator.sanitize_schema(merged, keep_nullable)

        if new_schema.get("type") == "object":
            if "additionalProperties" not in new_schema:
                new_schema["additionalProperties"] = False

        for key, value in new_schema.items():
            # "properties" maps field names to schemas; a field may itself be called "title".
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {
                    prop: SchemaValidator.sanitize_schema(prop_schema, keep_nullable)
                    for prop, prop_schema in value.items()
                }
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value, keep_nullable)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item, keep_nullable) if isinstance(item, dict) else item
                    for item in value
                ]

        return new_schema

    @staticmethod
    def resolve_model_schema(model: Type[BaseModel], keep_nullable: bool = False) -> Dict[str, Any]:
        """Render a contract model as a self-contained JSON schema.

        Args:
            model: The pydantic model describing the contract.
            keep_nullable: Passed through to ``sanitize_schema``.

        Returns:
            A JSON schema dict without ``$ref`` indirections.

        Raises:
            InvalidToolDefinitionError: If the model is recursive.
        """
        raw_schema = model.model_json_schema(by_alias=True)
        SchemaValidator.assert_no_recursive_refs(raw_schema)
        # proxies=False ensures we get a plain dict back, not JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return SchemaValidator.sanitize_schema(resolved, keep_nullable=keep_nullable)

    @staticmethod
    def validate_payload(model: Type[BaseModel], payload: Any) -> BaseModel:
        """Validate a payload against a contract model.

        Model instances are never trusted as they are: they may have been mutated
        or built with ``model_construct``. They are serialized with their aliases and
        validated again from JSON.

        Raises:
            pydantic.ValidationError: With one error entry per violated field.
            pydantic_core.PydanticSerializationError: If an instance holds a value that
                cannot be serialized.
        """
        if isinstance(payload, BaseModel):
            return model.model_validate_json(payload.model_dump_json(by_alias=True))
        return model.model_validate(payload)

    @staticmethod
    def describe_errors(error: ValidationError) -> List[Dict[str, Any]]:
        """Flatten a pydantic ValidationError into caller-facing violation records."""
        violations = []
        for item in error.errors(include_url=False):
            loc = item.get("loc") or ()
            field = ".".join(str(part) for part in loc) or ROOT_FIELD
            violations.append({"field": field, "message": item.get("msg", ""), "type": item.get("type", "")})
        return violations
