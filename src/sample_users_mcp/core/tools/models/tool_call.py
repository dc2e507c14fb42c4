"""Data models for a single tool invocation."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


def canonical_json(value: Any) -> str:
    """Serialize a structured result into its canonical human-readable text form."""
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def new_call_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents one incoming tool call, as extracted by a transport.

    A fresh ``call_id`` is minted per request and never reused.
    """

    name: str
    arguments: Any
    call_id: str = field(default_factory=new_call_id)


@dataclass(frozen=True)
class InvocationResult:
    """Represents the outcome of a successful tool call.

    ``textual`` is always derived from ``structured``; use ``from_structured``
    instead of building both by hand.
    """

    name: str
    structured: Dict[str, Any]
    textual: str
    call_id: str

    @classmethod
    def from_structured(cls, name: str, structured: Dict[str, Any], call_id: str) -> InvocationResult:
        return cls(name=name, structured=structured, textual=canonical_json(structured), call_id=call_id)
