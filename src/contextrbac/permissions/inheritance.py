"""Role inheritance resolution.

Provides:
- ``resolve_permissions()`` — a role's own tokens plus every ancestor's, for one resource.
- ``resolve_all_resource_permissions()`` — the same, for every reachable resource.
- ``parent_roles()`` / ``ancestor_roles()`` / ``inherits_from()`` — graph queries.

The inheritance graph may contain cycles and diamonds. Every walk keeps a
seen-set keyed by role name, so each role is visited at most once.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from .store import RoleStore

logger = logging.getLogger(__name__)


def _walk(store: RoleStore, role: str) -> Iterator[str]:
    """Yield ``role`` and every role reachable from it, breadth-first, once each.

    Unknown roles are yielded too (they simply have no definition); callers
    decide whether absence matters.
    """
    seen: set[str] = {role}
    queue = deque([role])

    while queue:
        current = queue.popleft()
        yield current
        for parent in store.parents(current):
            if parent in seen:
                if parent == role:
                    logger.debug("Inheritance cycle: '%s' reaches itself via '%s'", role, current)
                continue
            seen.add(parent)
            queue.append(parent)


def parent_roles(store: RoleStore, role: str) -> list[str]:
    """Direct parents of ``role`` (empty for unknown roles)."""
    return store.parents(role)


def ancestor_roles(store: RoleStore, role: str) -> tuple[str, ...]:
    """Every role reachable from ``role``, excluding ``role`` itself.

    Example::

        # base ← member ← editor
        ancestor_roles(store, "editor")  # ("member", "base")
    """
    if role not in store:
        return ()
    return tuple(r for r in _walk(store, role) if r != role and r in store)


def inherits_from(store: RoleStore, role: str, ancestor: str) -> bool:
    """True iff ``ancestor`` is reachable from ``role``.

    Reflexive for known roles (``inherits_from(s, "a", "a")`` is True).
    False when either role is unknown.
    """
    if role not in store or ancestor not in store:
        return False
    return any(r == ancestor for r in _walk(store, role))


def resolve_permissions(store: RoleStore, role: str, resource: str) -> tuple[str, ...]:
    """Resolve all tokens visible to ``role`` on ``resource``.

    Tokens are kept as opaque strings and de-duplicated by exact equality,
    in first-seen order (the role's own tokens before its ancestors').

    Args:
        store: Role store to read definitions from.
        role: Role to resolve.
        resource: Resource whose tokens are collected.

    Returns:
        Tuple of distinct tokens; empty for unknown roles or resources.

    Example::

        # base: {posts: [read]}, member(inherits base): {posts: [create:own]}
        resolve_permissions(store, "member", "posts")  # ("create:own", "read")
    """
    resolved: dict[str, None] = {}
    for current in _walk(store, role):
        for token in store.direct_permissions(current, resource):
            resolved.setdefault(token, None)
    return tuple(resolved)


def resolve_all_resource_permissions(store: RoleStore, role: str) -> dict[str, tuple[str, ...]]:
    """Resolve tokens for every resource reachable from ``role``.

    Returns:
        Mapping resource → distinct tokens; empty for unknown roles.
    """
    if role not in store:
        return {}

    resolved: dict[str, dict[str, None]] = {}
    for current in _walk(store, role):
        for resource in store.resources(current):
            bucket = resolved.setdefault(resource, {})
            for token in store.direct_permissions(current, resource):
                bucket.setdefault(token, None)
    return {resource: tuple(tokens) for resource, tokens in resolved.items()}


__all__ = [
    "ancestor_roles",
    "inherits_from",
    "parent_roles",
    "resolve_all_resource_permissions",
    "resolve_permissions",
]
