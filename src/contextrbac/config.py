"""Runtime configuration for contextrbac.

Pydantic-validated settings for the ambient concerns of the engine
(log level, log format, decision tracing). Role definitions are NOT part of
this model; they are handed to :class:`contextrbac.RBAC` directly.

Direct os.environ/os.getenv usage is limited to
:func:`load_config_from_env`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RBACConfig(BaseModel):
    """Settings shared by every RBAC instance in a process.

    Environment variables (see :func:`load_config_from_env`):
        RBAC_LOG_LEVEL      — DEBUG | INFO | WARNING | ERROR | CRITICAL
        RBAC_LOG_JSON       — JSON log output (true/false)
        RBAC_LOG_DECISIONS  — emit a DEBUG record for every decision
        RBAC_SERVICE_NAME   — logger name for the host service
    """

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for contextrbac loggers",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    log_decisions: bool = Field(
        default=False,
        description="Log every can()/explain() outcome at DEBUG level",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Host service name, used as an extra logger to configure",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_config_from_env() -> RBACConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is used for contextrbac settings.

    Environment variables:
    - RBAC_LOG_LEVEL: Logging level (default: INFO)
    - RBAC_LOG_JSON: Use JSON log format (true/false, default: false)
    - RBAC_LOG_DECISIONS: Trace decisions at DEBUG (true/false, default: false)
    - RBAC_SERVICE_NAME: Host service name

    Returns:
        RBACConfig instance with values from environment or defaults.
    """
    import os

    truthy = ("true", "1", "yes", "on")

    return RBACConfig(
        log_level=os.getenv("RBAC_LOG_LEVEL", "INFO"),
        log_json=os.getenv("RBAC_LOG_JSON", "false").lower() in truthy,
        log_decisions=os.getenv("RBAC_LOG_DECISIONS", "false").lower() in truthy,
        service_name=os.getenv("RBAC_SERVICE_NAME"),
    )


__all__ = [
    "LogLevel",
    "RBACConfig",
    "load_config_from_env",
]
