"""Decision engine — does a resolved token set grant a requested permission?

Provides runtime functions answering the question for a single request
(``decide`` / ``check_single``) and for a role in a :class:`RoleStore`
(``can`` / ``has`` / ``has_wildcard_permission``).

``decide`` returns a reason code rather than a boolean so that the
explanation path and the boolean path share one procedure and cannot
disagree.
"""

from __future__ import annotations

from typing import Collection, Iterable, Union

from .constants import WILDCARD_PERMISSION, ExplanationReason
from .inheritance import resolve_permissions
from .store import RoleStore
from .tokens import ParsedPermission, parse_permission

PermissionRequest = Union[str, Iterable[str]]


def _as_list(permission: PermissionRequest) -> list[str]:
    if isinstance(permission, str):
        return [permission]
    return list(permission)


def decide(tokens: Collection[str], requested: ParsedPermission) -> str:
    """Run the decision procedure and report which rule decided.

    Checks in order:
    1. No tokens at all → ``RESOURCE_NOT_ALLOWED``
    2. ``*`` present → granted for unqualified requests; for qualified
       requests granted unless the pre-evaluated result is not ``"true"``
    3. Qualified request and the bare action is granted → granted
       (a general grant subsumes any qualified request, whatever the result)
    4. A grant with the same action and the same qualifier (or both
       unqualified) must exist; a grant present only in qualified form does
       not satisfy an unqualified request
    5. Matched, request carries a result → granted iff it is ``"true"``
    6. Matched, qualified, no result → granted (default-true)
    7. Matched, unqualified → granted

    Args:
        tokens: Resolved tokens for a (role, resource) pair.
        requested: Parsed request token.

    Returns:
        An :class:`ExplanationReason` code; granting codes are listed in
        ``ExplanationReason.GRANTING``.

    Example::

        decide({"update:own"}, parse_permission("update:own|false"))
        # "OWNERSHIP_CHECK_FAILED"
        decide({"update"}, parse_permission("update:own|false"))
        # "GENERIC_PERMISSION_WITH_OWNERSHIP"
    """
    if not tokens:
        return ExplanationReason.RESOURCE_NOT_ALLOWED

    token_set = set(tokens)
    action = requested.action

    # Wildcard
    if WILDCARD_PERMISSION in token_set:
        if not requested.is_qualified:
            return ExplanationReason.WILDCARD_PERMISSION
        if not requested.has_result or requested.result_passed:
            return ExplanationReason.WILDCARD_WITH_OWNERSHIP
        return ExplanationReason.OWNERSHIP_CHECK_FAILED

    # General grant subsumes qualified request
    if requested.is_qualified and action in token_set:
        return ExplanationReason.GENERIC_PERMISSION_WITH_OWNERSHIP

    matched = False
    qualified_only = False
    for token in token_set:
        granted = parse_permission(token)
        if granted.action != action:
            continue
        if granted.qualifier == requested.qualifier:
            matched = True
            break
        if not requested.is_qualified and granted.is_qualified:
            qualified_only = True

    if not matched:
        if qualified_only:
            return ExplanationReason.REQUIRES_OWNERSHIP
        return ExplanationReason.ACTION_NOT_ALLOWED

    if requested.has_result:
        if requested.result_passed:
            return ExplanationReason.PERMISSION_WITH_OWNERSHIP
        return ExplanationReason.OWNERSHIP_CHECK_FAILED

    if requested.is_qualified:
        return ExplanationReason.PERMISSION_WITH_OWNERSHIP_DEFAULT

    return ExplanationReason.PERMISSION_GRANTED


def check_single(tokens: Collection[str], permission: str) -> bool:
    """Check one request token against a resolved token set.

    Example::

        check_single(("read", "update:own"), "read")             # True
        check_single(("read", "update:own"), "update")           # False
        check_single(("read", "update:own"), "update:own|true")  # True
        check_single(("*",), "configure-backup")                 # True
    """
    return decide(tokens, parse_permission(permission)) in ExplanationReason.GRANTING


def has_pattern(tokens: Collection[str], permission: str) -> bool:
    """Check whether a grant *shape* is present, ignoring any pre-evaluated result.

    Example::

        has_pattern(("update",), "update:own")      # True  (general grant)
        has_pattern(("update:own",), "update")      # False
        has_pattern(("*",), "anything:own")         # True
    """
    shape = parse_permission(permission).without_result()
    return decide(tokens, shape) in ExplanationReason.GRANTING


def can(store: RoleStore, role: str, permission: PermissionRequest, resource: str) -> bool:
    """Check if ``role`` may perform ``permission`` on ``resource``.

    A list of permissions is granted when any element is granted, evaluated
    left to right; an empty list is denied.

    Args:
        store: Role store.
        role: Role name (unknown roles are denied).
        permission: A token or list of tokens (e.g. ``own("update", uid, owner)``).
        resource: Resource name.

    Returns:
        True if access is granted.
    """
    tokens = resolve_permissions(store, role, resource)
    return any(check_single(tokens, p) for p in _as_list(permission))


def has(store: RoleStore, role: str, permission: str, resource: str) -> bool:
    """Check if ``role``'s resolved grants include the ``permission`` pattern."""
    return has_pattern(resolve_permissions(store, role, resource), permission)


def has_wildcard_permission(store: RoleStore, role: str, resource: str) -> bool:
    """Check if ``role`` holds ``*`` on ``resource`` (directly or inherited)."""
    return WILDCARD_PERMISSION in resolve_permissions(store, role, resource)


__all__ = [
    "PermissionRequest",
    "can",
    "check_single",
    "decide",
    "has",
    "has_pattern",
    "has_wildcard_permission",
]
