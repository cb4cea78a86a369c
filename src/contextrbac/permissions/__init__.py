"""Permission resolution engine for contextrbac.

Defines:
- Token codec: ``action[:qualifier][|result]`` parsing and the own/group/val helpers
- RoleDefinition / RoleStore: role configuration and merge-style updates
- Inheritance: cycle-safe multi-parent token resolution
- Decision engine: wildcard, generality and qualifier rules
- Explanation: structured rationale for each decision
"""

from .access import (
    PermissionRequest,
    can,
    check_single,
    decide,
    has,
    has_pattern,
    has_wildcard_permission,
)
from .constants import WILDCARD_PERMISSION, ExplanationReason, Qualifier
from .explain import Explanation, explain, explain_single
from .inheritance import (
    ancestor_roles,
    inherits_from,
    parent_roles,
    resolve_all_resource_permissions,
    resolve_permissions,
)
from .models import RoleDefinition, RolesConfig
from .store import RoleStore
from .tokens import (
    ParsedPermission,
    PermissionBuilder,
    format_permission,
    group,
    own,
    parse_permission,
    val,
)

__all__ = [
    "WILDCARD_PERMISSION",
    "Explanation",
    "ExplanationReason",
    "ParsedPermission",
    "PermissionBuilder",
    "PermissionRequest",
    "Qualifier",
    "RoleDefinition",
    "RoleStore",
    "RolesConfig",
    "ancestor_roles",
    "can",
    "check_single",
    "decide",
    "explain",
    "explain_single",
    "format_permission",
    "group",
    "has",
    "has_pattern",
    "has_wildcard_permission",
    "inherits_from",
    "own",
    "parent_roles",
    "parse_permission",
    "resolve_all_resource_permissions",
    "resolve_permissions",
    "val",
]
