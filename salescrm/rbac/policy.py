# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Default permissions per role and resolution of effective permissions.

The tables below are the fallback for keys a user's stored ``permissions``
does not mention. They are read-only; administrators customise access by
writing stored permissions, never by changing these defaults.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from salescrm.models.enums import Action, ResourceType, Scope, UserRole
from salescrm.rbac.errors import ScopeConfigurationError
from salescrm.rbac.identity import Identity
from salescrm.rbac.permissions import (
    CAPABILITY_KEYS,
    CAPABILITY_PERMISSIONS,
    SCOPED_PERMISSIONS,
    permission_key,
)

# Developers get everything
DEVELOPER_PERMISSIONS: dict[str, Scope | bool] = {
    **{p["code"]: Scope.ALL for p in SCOPED_PERMISSIONS},
    **{p["code"]: True for p in CAPABILITY_PERMISSIONS},
}

ADMIN_PERMISSIONS: dict[str, Scope | bool] = {
    "viewLeads": Scope.SUBORDINATES,
    "editLeads": Scope.CREATED,
    "deleteLeads": Scope.CREATED,
    "viewCustomers": Scope.SUBORDINATES,
    "editCustomers": Scope.CREATED,
    "deleteCustomers": Scope.CREATED,
    "viewCommunications": Scope.SUBORDINATES,
    "viewFollowUps": Scope.SUBORDINATES,
    "editFollowUps": Scope.SUBORDINATES,
    "deleteFollowUps": Scope.SUBORDINATES,
    "viewUsers": Scope.SUBORDINATES,
    "editUsers": Scope.CREATED,
    "deleteUsers": Scope.CREATED,
    "createLeads": True,
    "assignLeads": True,
    "createCustomers": True,
    "assignCustomers": True,
    "manageRenewals": True,
    "addCommunications": True,
    "addFollowUps": True,
    "playRecordings": True,
    "downloadRecordings": True,
    "createAdmin": False,
    "createEmployee": True,
    "editUserPermissions": True,
    "clearSystemData": False,
}

# Employees never see other accounts; their own record stays visible
EMPLOYEE_PERMISSIONS: dict[str, Scope | bool] = {
    "viewLeads": Scope.ASSIGNED,
    "editLeads": Scope.ASSIGNED,
    "deleteLeads": Scope.NONE,
    "viewCustomers": Scope.ASSIGNED,
    "editCustomers": Scope.ASSIGNED,
    "deleteCustomers": Scope.NONE,
    "viewCommunications": Scope.ASSIGNED,
    "viewFollowUps": Scope.ASSIGNED,
    "editFollowUps": Scope.CREATED,
    "deleteFollowUps": Scope.CREATED,
    "viewUsers": Scope.NONE,
    "editUsers": Scope.NONE,
    "deleteUsers": Scope.NONE,
    "createLeads": True,
    "assignLeads": False,
    "createCustomers": True,
    "assignCustomers": False,
    "manageRenewals": False,
    "addCommunications": True,
    "addFollowUps": True,
    "playRecordings": True,
    "downloadRecordings": False,
    "createAdmin": False,
    "createEmployee": False,
    "editUserPermissions": False,
    "clearSystemData": False,
}

DEFAULT_ROLE_PERMISSIONS: Mapping[UserRole, Mapping[str, Scope | bool]] = (
    MappingProxyType(
        {
            UserRole.DEVELOPER: MappingProxyType(DEVELOPER_PERMISSIONS),
            UserRole.ADMIN: MappingProxyType(ADMIN_PERMISSIONS),
            UserRole.EMPLOYEE: MappingProxyType(EMPLOYEE_PERMISSIONS),
        }
    )
)

# Older permission rows stored the communication scope under another name
LEGACY_SCOPE_ALIASES: Mapping[str, Scope] = MappingProxyType(
    {"assignedContacts": Scope.ASSIGNED}
)


def default_scope(role: UserRole, resource_type: ResourceType, action: Action) -> Scope:
    """Return the table default for a scoped action."""
    value = DEFAULT_ROLE_PERMISSIONS[role][permission_key(resource_type, action)]
    return Scope(value)


def default_capability(role: UserRole, key: str) -> bool:
    """Return the table default for a capability key."""
    if key not in CAPABILITY_KEYS:
        raise ValueError(f"Unknown capability: {key}")
    return bool(DEFAULT_ROLE_PERMISSIONS[role][key])


def default_permissions(role: UserRole) -> dict[str, Any]:
    """Return a JSON-ready copy of the defaults, used to seed a new user."""
    return {
        key: value.value if isinstance(value, Scope) else value
        for key, value in DEFAULT_ROLE_PERMISSIONS[role].items()
    }


def resolve_scope(
    identity: Identity, resource_type: ResourceType, action: Action
) -> Scope:
    """Return the effective scope of an identity for one scoped action.

    Stored permissions win over the table. Raises ScopeConfigurationError
    when the stored value is not a known scope, or when SUBORDINATES is
    configured for anyone but an admin.
    """
    key = permission_key(resource_type, action)
    raw = identity.permissions.get(key)
    if raw is None:
        return default_scope(identity.role, resource_type, action)

    if isinstance(raw, bool):
        raise ScopeConfigurationError(
            identity.id, key, raw, "scoped permission stored as a boolean"
        )
    if not isinstance(raw, str):
        raise ScopeConfigurationError(identity.id, key, raw, "not a scope value")

    if raw in LEGACY_SCOPE_ALIASES:
        scope = LEGACY_SCOPE_ALIASES[raw]
    else:
        try:
            scope = Scope(raw)
        except ValueError:
            raise ScopeConfigurationError(
                identity.id, key, raw, "unknown scope"
            ) from None

    if scope is Scope.SUBORDINATES and identity.role != UserRole.ADMIN:
        raise ScopeConfigurationError(
            identity.id, key, raw, f"subordinates scope on a {identity.role.value}"
        )
    return scope


def resolve_capability(identity: Identity, key: str) -> bool:
    """Return the effective value of a capability key.

    Raises ScopeConfigurationError when the stored value is not a boolean.
    """
    raw = identity.permissions.get(key)
    if raw is None:
        return default_capability(identity.role, key)
    if not isinstance(raw, bool):
        raise ScopeConfigurationError(identity.id, key, raw, "capability is not a boolean")
    return raw
