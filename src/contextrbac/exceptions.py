"""Exception hierarchy for contextrbac.

The decision path (``can``, ``has``, ``explain``) never raises: unknown roles,
unknown resources and malformed tokens resolve to a deny. Exceptions are
reserved for structurally invalid role configuration handed to the store.

Usage:
    from contextrbac.exceptions import RBACError, RoleConfigurationError

Hosts may define thin subclasses for their own errors:
    @register_error("MY_POLICY_ERROR")
    class MyPolicyError(RBACError):
        code = "MY_POLICY_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "RBACError",
    "ConfigurationError",
    "RoleConfigurationError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class RBACError(Exception):
    """Base exception for contextrbac.

    Attributes:
        code: Stable error code string (e.g. "ROLE_CONFIGURATION_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(RBACError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class RoleConfigurationError(ConfigurationError):
    """A role definition could not be validated.

    ``details`` carries ``role`` (the offending role name) and ``errors``
    (the pydantic error list) when available.
    """

    code: str = "ROLE_CONFIGURATION_ERROR"
    message: str = "Invalid role configuration"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[RBACError])


class ErrorRegistry:
    """Registry mapping stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[RBACError]] = {}

    def register(self, code: str, error_cls: type[RBACError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[RBACError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[RBACError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(RBACError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", RBACError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("ROLE_CONFIGURATION_ERROR", RoleConfigurationError)
