"""Contract construction, schema rendering and payload validation."""

from .schema_validator import SchemaValidator
from .contract_factory import ContractFactory, FieldTuple, CONTRACT_CONFIG

__all__ = ["SchemaValidator", "ContractFactory", "FieldTuple", "CONTRACT_CONFIG"]
