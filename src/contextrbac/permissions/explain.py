"""Explanation builder — why was a permission granted or denied?

Runs the same procedure as :func:`contextrbac.permissions.access.decide` and
wraps the reason code in an :class:`Explanation` carrying a human-readable
message. ``Explanation.granted`` always equals the boolean ``can()`` returns
for the same single request.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from .access import PermissionRequest, decide
from .constants import WILDCARD_PERMISSION, ExplanationReason
from .inheritance import resolve_permissions
from .store import RoleStore
from .tokens import ParsedPermission, parse_permission


class Explanation(BaseModel):
    """Structured rationale for a single decision."""

    model_config = {"frozen": True}

    granted: bool
    reason: str
    role: str
    resource: str
    action: str
    qualifier: Optional[str] = None
    details: str = ""


_DETAILS: dict[str, str] = {
    ExplanationReason.ROLE_NOT_FOUND: "Role '{role}' does not exist",
    ExplanationReason.RESOURCE_NOT_ALLOWED: "{name} has no permissions on '{resource}'",
    ExplanationReason.WILDCARD_PERMISSION: "{name} has wildcard permission on '{resource}'",
    ExplanationReason.WILDCARD_WITH_OWNERSHIP: (
        "{name} has wildcard permission on '{resource}' and the '{qualifier}' check passed"
    ),
    ExplanationReason.GENERIC_PERMISSION_WITH_OWNERSHIP: (
        "{name} can '{action}' any '{resource}', no '{qualifier}' check needed"
    ),
    ExplanationReason.REQUIRES_OWNERSHIP: (
        "{name} can only '{action}' '{resource}' with a qualifier ({qualifiers})"
    ),
    ExplanationReason.ACTION_NOT_ALLOWED: "{name} cannot '{action}' on '{resource}'",
    ExplanationReason.PERMISSION_WITH_OWNERSHIP: "{name} can '{action}' '{resource}', '{qualifier}' check passed",
    ExplanationReason.PERMISSION_WITH_OWNERSHIP_DEFAULT: (
        "{name} can '{action}:{qualifier}' on '{resource}' (no check result supplied)"
    ),
    ExplanationReason.PERMISSION_GRANTED: "{name} can '{action}' on '{resource}'",
}

_WILDCARD_FAILED = "{name} has wildcard permission on '{resource}' but the '{qualifier}' check failed"
_OWNERSHIP_FAILED = "{name} can only '{action}' '{resource}' when the '{qualifier}' check passes"


def _required_qualifiers(tokens: tuple[str, ...], action: str) -> str:
    qualifiers = {p.qualifier for p in map(parse_permission, tokens) if p.action == action and p.qualifier}
    return ", ".join(sorted(qualifiers))


def _details(
    reason: str,
    *,
    name: str,
    role: str,
    resource: str,
    requested: ParsedPermission,
    tokens: tuple[str, ...],
) -> str:
    if reason == ExplanationReason.OWNERSHIP_CHECK_FAILED:
        template = _WILDCARD_FAILED if WILDCARD_PERMISSION in tokens else _OWNERSHIP_FAILED
    else:
        template = _DETAILS[reason]
    return template.format(
        name=name,
        role=role,
        resource=resource,
        action=requested.action,
        qualifier=requested.qualifier or "",
        qualifiers=_required_qualifiers(tokens, requested.action),
    )


def explain_single(store: RoleStore, role: str, permission: str, resource: str) -> Explanation:
    """Explain the decision for one request token.

    Example::

        explain_single(store, "user", own("update", "1", "2"), "posts")
        # Explanation(granted=False, reason="OWNERSHIP_CHECK_FAILED", action="update",
        #             qualifier="own", details="Regular User can only 'update' ...")
    """
    requested = parse_permission(permission)
    tokens = resolve_permissions(store, role, resource)

    if role not in store:
        reason = ExplanationReason.ROLE_NOT_FOUND
    else:
        reason = decide(tokens, requested)

    return Explanation(
        granted=reason in ExplanationReason.GRANTING,
        reason=reason,
        role=role,
        resource=resource,
        action=requested.action,
        qualifier=requested.qualifier,
        details=_details(
            reason,
            name=store.display_name(role),
            role=role,
            resource=resource,
            requested=requested,
            tokens=tokens,
        ),
    )


def explain(
    store: RoleStore,
    role: str,
    permission: PermissionRequest,
    resource: str,
) -> Explanation | list[Explanation]:
    """Explain one request, or each request of a list (same order, no short-circuit)."""
    if isinstance(permission, str):
        return explain_single(store, role, permission, resource)
    return [explain_single(store, role, p, resource) for p in permission]


__all__ = [
    "Explanation",
    "explain",
    "explain_single",
]
