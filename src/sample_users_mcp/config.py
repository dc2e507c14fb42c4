"""
Server configuration.

Values come from the environment; a ``.env`` file in the working directory
or one of its parents is loaded first when ``from_env`` is called.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .core.exceptions import ConfigError
from .core.tools.execution import UnknownFieldPolicy

SERVER_NAME = "sample-users-mcp"
SERVER_VERSION = "1.1.0"

#: Environment variable names
TRANSPORT_ENV = "MCP_TRANSPORT"
HOST_ENV = "HOST"
PORT_ENV = "PORT"
LOG_LEVEL_ENV = "LOG_LEVEL"
TOOL_TIMEOUT_ENV = "TOOL_TIMEOUT"
UNKNOWN_FIELDS_ENV = "UNKNOWN_FIELDS"
CORS_ORIGINS_ENV = "CORS_ORIGINS"
DATA_FILE_ENV = "DATA_FILE"

_TRANSPORT_ALIASES = {
    "stdio": "stdio",
    "streamable-http": "streamable-http",
    "http": "streamable-http",
    "streamable": "streamable-http",
}

Transport = Literal["stdio", "streamable-http"]


class ServerConfig(BaseModel):
    """
    Runtime settings of the tool server.

    Attributes:
        transport: ``streamable-http`` (default) or ``stdio``.
        host: Interface the HTTP transport binds to.
        port: Port the HTTP transport listens on.
        log_level: Level name for the package logger.
        tool_timeout: Upper bound in seconds for one executor run.
        unknown_fields: Whether undeclared argument keys are rejected or ignored.
        cors_origins: Allowed browser origins; ``["*"]`` allows any.
        data_file: Optional JSON dataset replacing the built-in sample data.
    """

    transport: Transport = "streamable-http"
    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    log_level: str = "INFO"
    tool_timeout: float = Field(default=30.0, gt=0)
    unknown_fields: UnknownFieldPolicy = UnknownFieldPolicy.REJECT
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    data_file: Optional[Path] = None

    @field_validator("transport", mode="before")
    @classmethod
    def _normalize_transport(cls, value: object) -> object:
        if isinstance(value, str):
            raw = value.strip().lower()
            if raw not in _TRANSPORT_ALIASES:
                raise ValueError(f"Unknown transport '{value}'. Use stdio or streamable-http.")
            return _TRANSPORT_ALIASES[raw]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'.")
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: object) -> ServerConfig:
        """Build the configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``. No ``.env`` file is
                loaded when it is given.
            **overrides: Values that win over the environment, e.g. from CLI flags.
                ``None`` values are skipped.

        Raises:
            ConfigError: If a value is missing its expected format.
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        env_map = {
            "transport": TRANSPORT_ENV,
            "host": HOST_ENV,
            "port": PORT_ENV,
            "log_level": LOG_LEVEL_ENV,
            "tool_timeout": TOOL_TIMEOUT_ENV,
            "unknown_fields": UNKNOWN_FIELDS_ENV,
            "cors_origins": CORS_ORIGINS_ENV,
            "data_file": DATA_FILE_ENV,
        }
        values: dict[str, object] = {}
        for field_name, env_name in env_map.items():
            raw = environ.get(env_name)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        values.update({key: value for key, value in overrides.items() if value is not None})

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid server configuration: {e}") from e
