"""Role configuration models.

These are Pydantic models validating the declarative role configuration::

    {
        "editor": {
            "name": "Content Editor",
            "permissions": {"posts": ["create", "update:own"]},
            "inherits": ["member"],
        },
    }
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import RoleConfigurationError


def _unique(tokens: list[str]) -> list[str]:
    return list(dict.fromkeys(tokens))


class RoleDefinition(BaseModel):
    """Configuration of a single role.

    ``inherits`` is ``None`` when the definition does not mention parents,
    which ``RoleStore.merge_update`` distinguishes from an explicit empty
    list. ``description`` is opaque to the engine.
    """

    model_config = {"extra": "ignore"}

    name: Optional[str] = None
    description: Optional[str] = None
    permissions: dict[str, list[str]] = Field(default_factory=dict)
    inherits: Optional[list[str]] = None

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Collapse duplicate tokens per resource, keeping first occurrence."""
        return {resource: _unique(tokens) for resource, tokens in v.items()}

    @property
    def parents(self) -> list[str]:
        return list(self.inherits or [])


RolesConfig = Mapping[str, "RoleDefinition | Mapping[str, Any]"]


def coerce_role(role: str, definition: RoleDefinition | Mapping[str, Any]) -> RoleDefinition:
    """Validate one role definition.

    Raises:
        RoleConfigurationError: if the definition does not match the schema.
    """
    if isinstance(definition, RoleDefinition):
        return definition.model_copy(deep=True)
    try:
        return RoleDefinition.model_validate(definition)
    except ValidationError as e:
        raise RoleConfigurationError(
            f"Invalid definition for role '{role}': {e.error_count()} error(s)",
            role=role,
            errors=e.errors(),
        ) from e


def coerce_roles(config: RolesConfig) -> dict[str, RoleDefinition]:
    """Validate a whole role configuration, preserving insertion order."""
    if not isinstance(config, Mapping):
        raise RoleConfigurationError(
            f"Role configuration must be a mapping, got {type(config).__name__}",
        )
    return {role: coerce_role(role, definition) for role, definition in config.items()}


__all__ = [
    "RoleDefinition",
    "RolesConfig",
    "coerce_role",
    "coerce_roles",
]
