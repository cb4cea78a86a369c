"""Permission token codec.

Token grammar: ``action[:qualifier][|result]``

- ``"read"``               — bare action
- ``"update:own"``         — qualified grant or pattern (qualifier satisfied by default)
- ``"update:own|true"``    — pre-evaluated request produced by :func:`own`
- ``"*"``                  — wildcard, every action on the resource

Parsing never fails: malformed tokens are split by the fixed rules below and
simply fail to match any configured grant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from .constants import (
    QUALIFIER_SEPARATOR,
    RESULT_FALSE,
    RESULT_SEPARATOR,
    RESULT_TRUE,
    Qualifier,
)


@dataclass(frozen=True)
class ParsedPermission:
    """A permission token split into its parts.

    ``qualifier`` and ``result`` are ``None`` when the token does not carry
    them. An empty string after a separator is kept as an empty string.
    """

    action: str
    qualifier: str | None = None
    result: str | None = None

    @property
    def is_qualified(self) -> bool:
        return self.qualifier is not None

    @property
    def has_result(self) -> bool:
        return self.result is not None

    @property
    def result_passed(self) -> bool:
        """True when the pre-evaluated result is the literal ``"true"``."""
        return self.result == RESULT_TRUE

    def without_result(self) -> ParsedPermission:
        """Drop the result, keeping the grant shape (action + qualifier)."""
        return ParsedPermission(action=self.action, qualifier=self.qualifier)

    def to_token(self) -> str:
        return format_permission(self.action, self.qualifier, self.result)


def parse_permission(token: str) -> ParsedPermission:
    """Parse a permission token.

    Splits on the first ``|`` (right side is the result), then splits the
    left side on the first ``:`` (right side is the qualifier).

    Example::

        parse_permission("read")             # ParsedPermission("read")
        parse_permission("update:own")       # ParsedPermission("update", "own")
        parse_permission("update:own|false") # ParsedPermission("update", "own", "false")
    """
    body, sep, result = token.partition(RESULT_SEPARATOR)
    action, qsep, qualifier = body.partition(QUALIFIER_SEPARATOR)
    return ParsedPermission(
        action=action,
        qualifier=qualifier if qsep else None,
        result=result if sep else None,
    )


def format_result(value: bool | str) -> str:
    """Serialize a check outcome as the ``"true"`` / ``"false"`` literal."""
    if isinstance(value, str):
        return value
    return RESULT_TRUE if value else RESULT_FALSE


def format_permission(
    action: str,
    qualifier: str | None = None,
    result: bool | str | None = None,
) -> str:
    """Build a permission token from its parts (inverse of :func:`parse_permission`)."""
    token = action
    if qualifier is not None:
        token = f"{token}{QUALIFIER_SEPARATOR}{qualifier}"
    if result is not None:
        token = f"{token}{RESULT_SEPARATOR}{format_result(result)}"
    return token


# ── Immediate-evaluation helpers ───────────────────────


def _same_id(left: object, right: object) -> bool:
    # 1, 1.0 and True are distinct identities
    return type(left) is type(right) and left == right


def own(action: str, actor_id: object, owner_id: object) -> str:
    """Build an ownership request token.

    IDs match only when they have the same type and compare equal.

    Example::

        own("update", "123", "123")  # "update:own|true"
        own("update", "123", "456")  # "update:own|false"
        own("update", 1, True)       # "update:own|false"
    """
    return format_permission(action, Qualifier.OWN, _same_id(actor_id, owner_id))


def group(action: str, actor_id: object, member_ids: Iterable[object]) -> str:
    """Build a group-membership request token.

    Membership uses the same ID comparison as :func:`own`.

    Example::

        group("edit", "u1", ["u1", "u2"])  # "edit:group|true"
    """
    return format_permission(action, Qualifier.GROUP, any(_same_id(actor_id, m) for m in member_ids))


def val(action: str, validator: Callable[[], object]) -> str:
    """Build a custom-validation request token.

    The validator is called once, right now. Its outcome is frozen into the
    token; the decision engine never calls it again.

    Example::

        val("export", lambda: report.is_published)  # "export:val|true"
    """
    return format_permission(action, Qualifier.VAL, bool(validator()))


class PermissionBuilder:
    """Namespaced builders for permission tokens.

    Mirrors the module-level helpers::

        PermissionBuilder.permission("update", "own")     → "update:own"
        PermissionBuilder.own("update", uid, owner_id)    → "update:own|true"
        PermissionBuilder.group("edit", uid, members)     → "edit:group|false"
        PermissionBuilder.val("export", check)            → "export:val|true"
    """

    @staticmethod
    def permission(action: str, qualifier: str | None = None) -> str:
        """Build a grant or pattern token (no pre-evaluated result)."""
        return format_permission(action, qualifier)

    own = staticmethod(own)
    group = staticmethod(group)
    val = staticmethod(val)


__all__ = [
    "ParsedPermission",
    "PermissionBuilder",
    "format_permission",
    "format_result",
    "group",
    "own",
    "parse_permission",
    "val",
]
