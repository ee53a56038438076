"""Dev Helper server configuration.

Typed configuration for the tool server. Settings use Pydantic v2 models so
they are validated at construction time and can be serialised to/from JSON
or read from environment variables.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseModel):
    """Global Dev Helper configuration.

    Created once by the CLI entry point and handed to the dispatcher and the
    transport adapter.
    """

    server_name: str = Field(default="dev-helper-mcp-server")
    server_version: str = Field(default="1.0.0")
    default_node_version: str = Field(
        default="18-alpine", description="Node image tag used when a call omits nodeVersion"
    )
    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"],
        description="Argv prefix for the dependency install step; package names are appended",
    )
    install_timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="Seconds before the install step is killed. None waits indefinitely.",
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return upper

    @field_validator("install_command")
    @classmethod
    def _check_install_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("install_command must not be empty")
        return value

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DEVHELPER_SERVER_NAME, DEVHELPER_NODE_VERSION,
            DEVHELPER_INSTALL_COMMAND, DEVHELPER_INSTALL_TIMEOUT,
            DEVHELPER_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DEVHELPER_SERVER_NAME"):
            kwargs["server_name"] = os.environ["DEVHELPER_SERVER_NAME"]
        if os.environ.get("DEVHELPER_NODE_VERSION"):
            kwargs["default_node_version"] = os.environ["DEVHELPER_NODE_VERSION"]
        if os.environ.get("DEVHELPER_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["DEVHELPER_INSTALL_COMMAND"])
        if os.environ.get("DEVHELPER_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["DEVHELPER_INSTALL_TIMEOUT"])
        if os.environ.get("DEVHELPER_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["DEVHELPER_LOG_LEVEL"]
        return cls(**kwargs)
