"""Permission token constants for contextrbac.

Provides:
- ``WILDCARD_PERMISSION`` — the ``*`` token granting every action on a resource.
- ``Qualifier`` — built-in qualifiers (own / group / val).
- ``ExplanationReason`` — reason codes reported by ``explain()``.
"""

from __future__ import annotations

WILDCARD_PERMISSION = "*"

# Token grammar: action[:qualifier][|result]
QUALIFIER_SEPARATOR = ":"
RESULT_SEPARATOR = "|"

RESULT_TRUE = "true"
RESULT_FALSE = "false"


class Qualifier:
    """Built-in qualifiers narrowing a grant.

    Any other word is a legal caller-defined qualifier; these three are the
    ones produced by the helpers in :mod:`contextrbac.permissions.tokens`.
    """

    OWN = "own"  # Actor owns the resource
    GROUP = "group"  # Actor is a member of the resource's group
    VAL = "val"  # Custom validator passed

    ALL = frozenset({"own", "group", "val"})


class ExplanationReason:
    """Reason codes attached to an :class:`~contextrbac.permissions.explain.Explanation`.

    Listed in the order the decision procedure reaches them.
    """

    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    RESOURCE_NOT_ALLOWED = "RESOURCE_NOT_ALLOWED"
    WILDCARD_PERMISSION = "WILDCARD_PERMISSION"
    WILDCARD_WITH_OWNERSHIP = "WILDCARD_WITH_OWNERSHIP"
    OWNERSHIP_CHECK_FAILED = "OWNERSHIP_CHECK_FAILED"
    GENERIC_PERMISSION_WITH_OWNERSHIP = "GENERIC_PERMISSION_WITH_OWNERSHIP"
    REQUIRES_OWNERSHIP = "REQUIRES_OWNERSHIP"
    ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
    PERMISSION_WITH_OWNERSHIP = "PERMISSION_WITH_OWNERSHIP"
    PERMISSION_WITH_OWNERSHIP_DEFAULT = "PERMISSION_WITH_OWNERSHIP_DEFAULT"
    PERMISSION_GRANTED = "PERMISSION_GRANTED"

    GRANTING = frozenset(
        {
            "WILDCARD_PERMISSION",
            "WILDCARD_WITH_OWNERSHIP",
            "GENERIC_PERMISSION_WITH_OWNERSHIP",
            "PERMISSION_WITH_OWNERSHIP",
            "PERMISSION_WITH_OWNERSHIP_DEFAULT",
            "PERMISSION_GRANTED",
        }
    )


__all__ = [
    "QUALIFIER_SEPARATOR",
    "RESULT_FALSE",
    "RESULT_SEPARATOR",
    "RESULT_TRUE",
    "WILDCARD_PERMISSION",
    "ExplanationReason",
    "Qualifier",
]
