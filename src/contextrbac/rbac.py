"""RBAC facade — the public decision API.

Wraps a :class:`RoleStore` and exposes the decision, explanation and
role-introspection operations::

    rbac = RBAC({
        "user": {
            "name": "Regular User",
            "permissions": {"posts": ["create:own", "update:own", "read"]},
        },
    })
    rbac.can("user", "read", "posts")                     # True
    rbac.can("user", own("update", uid, owner), "posts")  # uid == owner

The instance is not thread-safe: hosts sharing it between threads guard
``update_roles`` and all reads with their own lock.
"""

from __future__ import annotations

from typing import Optional

from .config import RBACConfig
from .logging import get_decision_logger, safe_preview
from .permissions import access, inheritance
from .permissions.access import PermissionRequest
from .permissions.explain import Explanation, explain as explain_permission
from .permissions.models import RolesConfig
from .permissions.store import RoleStore

logger = get_decision_logger(__name__)


class RBAC:
    """Role-based access control with inheritance and qualified grants.

    Args:
        roles: Mapping role name → definition (``name``, ``description``,
            ``permissions``, ``inherits``).
        config: Optional :class:`RBACConfig`; ``log_decisions`` enables a
            DEBUG record for each ``can()`` / ``explain()`` call.

    Raises:
        RoleConfigurationError: if a role definition is structurally invalid.
    """

    def __init__(self, roles: Optional[RolesConfig] = None, *, config: Optional[RBACConfig] = None) -> None:
        self._config = config or RBACConfig()
        self._store = RoleStore(roles)

    @property
    def store(self) -> RoleStore:
        return self._store

    @property
    def config(self) -> RBACConfig:
        return self._config

    # ── Decisions ───────────────────────────────────────

    def can(self, role: str, permission: PermissionRequest, resource: str) -> bool:
        """Check if ``role`` may perform ``permission`` on ``resource``.

        ``permission`` may be a list; access is granted if any element is.
        Never raises: unknown roles and resources are denied.
        """
        granted = access.can(self._store, role, permission, resource)
        if self._config.log_decisions:
            logger.debug(
                "can -> %s",
                granted,
                role=role,
                resource=resource,
                permission=safe_preview(permission),
            )
        return granted

    def has(self, role: str, permission: str, resource: str) -> bool:
        """Check if ``role``'s grants include the ``permission`` pattern.

        Pre-evaluated results (``|true`` / ``|false``) are ignored.
        """
        return access.has(self._store, role, permission, resource)

    def explain(self, role: str, permission: PermissionRequest, resource: str) -> Explanation | list[Explanation]:
        """Explain a decision (or each decision of a list, in order)."""
        result = explain_permission(self._store, role, permission, resource)
        if self._config.log_decisions:
            explanations = result if isinstance(result, list) else [result]
            for item in explanations:
                logger.debug(
                    "explain -> %s (%s)",
                    item.granted,
                    item.reason,
                    role=role,
                    resource=resource,
                    permission=item.action,
                )
        return result

    can_explain = explain

    def has_wildcard_permission(self, role: str, resource: str) -> bool:
        return access.has_wildcard_permission(self._store, role, resource)

    # ── Roles ───────────────────────────────────────────

    def get_roles(self) -> list[str]:
        return self._store.roles()

    def get_name(self, role: str) -> str:
        """Display name of ``role``, or ``role`` itself if it has none."""
        return self._store.display_name(role)

    def get_description(self, role: str) -> str | None:
        return self._store.description(role)

    def get_parent_roles(self, role: str) -> list[str]:
        return inheritance.parent_roles(self._store, role)

    def inherits_from(self, role: str, ancestor: str) -> bool:
        """True iff ``ancestor`` is reachable from ``role`` (reflexive)."""
        return inheritance.inherits_from(self._store, role, ancestor)

    def get_all_permissions(self, role: str, resource: str) -> list[str]:
        """Own and inherited tokens of ``role`` on ``resource``, de-duplicated."""
        return list(inheritance.resolve_permissions(self._store, role, resource))

    def get_all_resource_permissions(self, role: str) -> dict[str, list[str]]:
        """Own and inherited tokens of ``role`` for every reachable resource."""
        resolved = inheritance.resolve_all_resource_permissions(self._store, role)
        return {resource: list(tokens) for resource, tokens in resolved.items()}

    def update_roles(self, roles: RolesConfig, merge: bool = True) -> RBAC:
        """Update role definitions.

        With ``merge=True`` (default) token lists are unioned, names and
        descriptions are kept unless supplied, and ``inherits`` is replaced
        only when supplied. With ``merge=False`` the whole store is replaced.

        Returns:
            ``self``, for chaining.

        Raises:
            RoleConfigurationError: if a definition is invalid (store unchanged).
        """
        if merge:
            self._store.merge_update(roles)
        else:
            self._store.replace(roles)
        return self

    def __repr__(self) -> str:
        return f"RBAC(roles={self.get_roles()!r})"


__all__ = ["RBAC"]
