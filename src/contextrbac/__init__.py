from .config import LogLevel, RBACConfig, load_config_from_env
from .exceptions import (
    ConfigurationError,
    RBACError,
    RoleConfigurationError,
    register_error,
)
from .logging import (
    DecisionFormatter,
    DecisionLoggerAdapter,
    get_decision_logger,
    safe_preview,
    setup_logging,
)
from .permissions import (
    WILDCARD_PERMISSION,
    Explanation,
    ExplanationReason,
    ParsedPermission,
    PermissionBuilder,
    Qualifier,
    RoleDefinition,
    RoleStore,
    RolesConfig,
    format_permission,
    group,
    own,
    parse_permission,
    val,
)
from .rbac import RBAC

__all__ = [
    'RBAC',
    'RoleStore',
    'RoleDefinition',
    'RolesConfig',
    'Explanation',
    'ExplanationReason',
    'ParsedPermission',
    'PermissionBuilder',
    'Qualifier',
    'WILDCARD_PERMISSION',
    'format_permission',
    'parse_permission',
    'own',
    'group',
    'val',
    'RBACConfig',
    'LogLevel',
    'load_config_from_env',
    'RBACError',
    'ConfigurationError',
    'RoleConfigurationError',
    'register_error',
    'safe_preview',
    'DecisionFormatter',
    'DecisionLoggerAdapter',
    'setup_logging',
    'get_decision_logger',
]
