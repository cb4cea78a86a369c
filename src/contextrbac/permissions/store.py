"""Role store — the single owned mapping of role name → role definition.

All mutation goes through :meth:`RoleStore.merge_update` or
:meth:`RoleStore.replace`. Lookups of unknown roles never raise.

Merge precedence for a role present in both old and new configuration:

- per-resource token lists are unioned (old tokens first, duplicates dropped);
- resources only present in the old definition are kept;
- ``name`` / ``description`` are kept unless the update supplies them;
- ``inherits`` is kept unless the update supplies it, in which case it is
  replaced wholesale (parent lists are never unioned).
"""

from __future__ import annotations

import logging

from .models import RoleDefinition, RolesConfig, coerce_roles

logger = logging.getLogger(__name__)


def _merge_definition(old: RoleDefinition, new: RoleDefinition) -> RoleDefinition:
    permissions = {resource: list(tokens) for resource, tokens in old.permissions.items()}
    for resource, tokens in new.permissions.items():
        merged = permissions.setdefault(resource, [])
        merged.extend(token for token in tokens if token not in merged)

    return RoleDefinition(
        name=new.name if new.name is not None else old.name,
        description=new.description if new.description is not None else old.description,
        permissions=permissions,
        inherits=list(new.inherits) if new.inherits is not None else old.inherits,
    )


class RoleStore:
    """Mapping from role name to :class:`RoleDefinition`.

    Not thread-safe: hosts sharing a store across threads must guard reads
    and updates with their own lock.
    """

    __slots__ = ("_roles",)

    def __init__(self, config: RolesConfig | None = None) -> None:
        self._roles: dict[str, RoleDefinition] = coerce_roles(config or {})
        logger.debug("Role store created with %d role(s)", len(self._roles))

    def get(self, role: str) -> RoleDefinition | None:
        """A copy of the stored definition; edit it through ``merge_update``."""
        definition = self._roles.get(role)
        return definition.model_copy(deep=True) if definition is not None else None

    def roles(self) -> list[str]:
        """All role names, in configuration insertion order."""
        return list(self._roles)

    def display_name(self, role: str) -> str:
        """Configured display name, falling back to the role name itself."""
        definition = self._roles.get(role)
        if definition is None or definition.name is None:
            return role
        return definition.name

    def description(self, role: str) -> str | None:
        definition = self._roles.get(role)
        return definition.description if definition is not None else None

    def parents(self, role: str) -> list[str]:
        definition = self._roles.get(role)
        return definition.parents if definition is not None else []

    def direct_permissions(self, role: str, resource: str) -> list[str]:
        """Tokens configured on the role itself (no inheritance)."""
        definition = self._roles.get(role)
        if definition is None:
            return []
        return list(definition.permissions.get(resource, []))

    def resources(self, role: str) -> list[str]:
        definition = self._roles.get(role)
        return list(definition.permissions) if definition is not None else []

    def merge_update(self, partial_config: RolesConfig) -> None:
        """Merge a partial configuration into the store.

        The partial configuration is validated up front, so a bad definition
        leaves the store untouched.

        Raises:
            RoleConfigurationError: if any definition is invalid.
        """
        updates = coerce_roles(partial_config)
        added, merged = 0, 0
        for role, definition in updates.items():
            existing = self._roles.get(role)
            if existing is None:
                self._roles[role] = definition
                added += 1
            else:
                self._roles[role] = _merge_definition(existing, definition)
                merged += 1
        logger.debug("Role store merge: %d added, %d merged", added, merged)

    def replace(self, config: RolesConfig) -> None:
        """Replace every role definition.

        Raises:
            RoleConfigurationError: if any definition is invalid.
        """
        self._roles = coerce_roles(config)
        logger.debug("Role store replaced with %d role(s)", len(self._roles))

    def __contains__(self, role: object) -> bool:
        return role in self._roles

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"RoleStore(roles={self.roles()!r})"


__all__ = ["RoleStore"]
