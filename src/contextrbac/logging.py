"""Logging utilities for contextrbac.

This module provides:
- Logging configuration from RBACConfig
- Safe preview utility for log values (permission lists, role configs)
- Structured formatter aware of decision context (role, resource, permission)
- Logger adapter that carries a role through every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, RBACConfig

# Record attributes that belong to logging itself, not to the caller's extras
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "role", "resource", "permission",
    }
)

_CONTEXT_KEYS = ("role", "resource", "permission")


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class DecisionFormatter(logging.Formatter):
    """Formatter that surfaces role/resource/permission context.

    Outputs JSON by default; plain text appends ``key=value`` pairs for the
    decision context that is present on the record.
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {key: getattr(record, key) for key in _CONTEXT_KEYS if getattr(record, key, None) is not None}
        log_data.update({key: safe_preview(value) for key, value in context.items()})

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        for key in _CONTEXT_KEYS:
            if key in log_data:
                parts.append(f"{key}={log_data[key]}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class DecisionLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds a role (and optional resource) to records.

    Usage:
        logger = get_decision_logger(__name__, role="editor")
        logger.debug("checked", resource="posts", permission="update:own")
    """

    def __init__(
        self,
        logger: logging.Logger,
        role: Optional[str] = None,
        resource: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.role = role
        self.resource = resource

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Move decision context from kwargs into ``extra``."""
        role = kwargs.pop("role", self.role)
        resource = kwargs.pop("resource", self.resource)
        permission = kwargs.pop("permission", None)

        extra = kwargs.get("extra", {})
        if role is not None:
            extra["role"] = role
        if resource is not None:
            extra["resource"] = resource
        if permission is not None:
            extra["permission"] = permission
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[RBACConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger for a host that embeds contextrbac.

    Args:
        config: RBACConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG.value: logging.DEBUG,
        LogLevel.INFO.value: logging.INFO,
        LogLevel.WARNING.value: logging.WARNING,
        LogLevel.ERROR.value: logging.ERROR,
        LogLevel.CRITICAL.value: logging.CRITICAL,
    }
    level_key = config.log_level.value if isinstance(config.log_level, LogLevel) else config.log_level
    log_level = level_map.get(level_key, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        DecisionFormatter(json_format=config.log_json if json_format is None else json_format)
    )
    root_logger.addHandler(console_handler)

    logging.getLogger("contextrbac").setLevel(log_level)
    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_decision_logger(
    name: str,
    role: Optional[str] = None,
    resource: Optional[str] = None,
) -> DecisionLoggerAdapter:
    """Get a logger adapter that tags records with decision context.

    Args:
        name: Logger name (typically __name__)
        role: Optional role to include in all records
        resource: Optional resource to include in all records

    Returns:
        DecisionLoggerAdapter instance
    """
    return DecisionLoggerAdapter(logging.getLogger(name), role=role, resource=resource)


__all__ = [
    "DecisionFormatter",
    "DecisionLoggerAdapter",
    "get_decision_logger",
    "safe_preview",
    "setup_logging",
]
