# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for the default permission table and permission resolution."""

import uuid

import pytest

from salescrm.models.enums import Action, ResourceType, Scope, UserRole
from salescrm.rbac.errors import ScopeConfigurationError
from salescrm.rbac.identity import Identity
from salescrm.rbac.permissions import (
    CAPABILITY_KEYS,
    SCOPED_PERMISSION_KEYS,
    permission_key,
)
from salescrm.rbac.policy import (
    DEFAULT_ROLE_PERMISSIONS,
    default_capability,
    default_permissions,
    default_scope,
    resolve_capability,
    resolve_scope,
)


def identity(role: UserRole, **permissions) -> Identity:
    return Identity(id=uuid.uuid4(), role=role, permissions=permissions)


@pytest.mark.parametrize(
    ("role", "resource_type", "action", "expected"),
    [
        (UserRole.DEVELOPER, ResourceType.LEAD, Action.DELETE, Scope.ALL),
        (UserRole.ADMIN, ResourceType.LEAD, Action.VIEW, Scope.SUBORDINATES),
        (UserRole.ADMIN, ResourceType.CUSTOMER, Action.EDIT, Scope.CREATED),
        (UserRole.ADMIN, ResourceType.COMMUNICATION, Action.VIEW, Scope.SUBORDINATES),
        (UserRole.ADMIN, ResourceType.USER, Action.DELETE, Scope.CREATED),
        (UserRole.EMPLOYEE, ResourceType.LEAD, Action.VIEW, Scope.ASSIGNED),
        (UserRole.EMPLOYEE, ResourceType.CUSTOMER, Action.EDIT, Scope.ASSIGNED),
        (UserRole.EMPLOYEE, ResourceType.CUSTOMER, Action.DELETE, Scope.NONE),
        (UserRole.EMPLOYEE, ResourceType.USER, Action.VIEW, Scope.NONE),
        (UserRole.ADMIN, ResourceType.FOLLOW_UP, Action.DELETE, Scope.SUBORDINATES),
        (UserRole.EMPLOYEE, ResourceType.FOLLOW_UP, Action.VIEW, Scope.ASSIGNED),
        (UserRole.EMPLOYEE, ResourceType.FOLLOW_UP, Action.EDIT, Scope.CREATED),
    ],
)
def test_default_scope(role, resource_type, action, expected):
    assert default_scope(role, resource_type, action) is expected


def test_every_role_defines_every_key():
    keys = set(SCOPED_PERMISSION_KEYS.values()) | set(CAPABILITY_KEYS)
    for role in UserRole:
        assert set(DEFAULT_ROLE_PERMISSIONS[role]) == keys


def test_defaults_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_ROLE_PERMISSIONS[UserRole.ADMIN]["viewLeads"] = Scope.ALL


def test_default_permissions_are_json_ready_copies():
    permissions = default_permissions(UserRole.ADMIN)
    assert permissions["viewLeads"] == "subordinates"
    assert permissions["createEmployee"] is True

    permissions["viewLeads"] = "all"
    assert DEFAULT_ROLE_PERMISSIONS[UserRole.ADMIN]["viewLeads"] is Scope.SUBORDINATES


def test_capability_defaults():
    assert default_capability(UserRole.DEVELOPER, "clearSystemData") is True
    assert default_capability(UserRole.ADMIN, "createEmployee") is True
    assert default_capability(UserRole.ADMIN, "createAdmin") is False
    assert default_capability(UserRole.EMPLOYEE, "createLeads") is True
    assert default_capability(UserRole.EMPLOYEE, "assignLeads") is False
    assert default_capability(UserRole.EMPLOYEE, "addFollowUps") is True


def test_unknown_capability_rejected():
    with pytest.raises(ValueError):
        default_capability(UserRole.DEVELOPER, "launchRockets")


def test_permission_key_rejects_unsupported_pair():
    assert permission_key(ResourceType.COMMUNICATION, Action.VIEW) == "viewCommunications"
    with pytest.raises(ValueError):
        permission_key(ResourceType.COMMUNICATION, Action.DELETE)


class TestResolveScope:
    """Tests for resolve_scope."""

    def test_stored_value_wins(self):
        ident = identity(UserRole.EMPLOYEE, viewLeads="created")
        assert resolve_scope(ident, ResourceType.LEAD, Action.VIEW) is Scope.CREATED

    def test_missing_key_falls_back_to_default(self):
        ident = identity(UserRole.EMPLOYEE)
        assert resolve_scope(ident, ResourceType.LEAD, Action.VIEW) is Scope.ASSIGNED

    def test_legacy_alias(self):
        ident = identity(UserRole.EMPLOYEE, viewCommunications="assignedContacts")
        scope = resolve_scope(ident, ResourceType.COMMUNICATION, Action.VIEW)
        assert scope is Scope.ASSIGNED

    def test_unknown_scope(self):
        ident = identity(UserRole.ADMIN, viewLeads="team")
        with pytest.raises(ScopeConfigurationError):
            resolve_scope(ident, ResourceType.LEAD, Action.VIEW)

    def test_boolean_under_scoped_key(self):
        ident = identity(UserRole.ADMIN, viewLeads=True)
        with pytest.raises(ScopeConfigurationError):
            resolve_scope(ident, ResourceType.LEAD, Action.VIEW)

    def test_subordinates_only_for_admins(self):
        ident = identity(UserRole.EMPLOYEE, viewLeads="subordinates")
        with pytest.raises(ScopeConfigurationError):
            resolve_scope(ident, ResourceType.LEAD, Action.VIEW)


class TestResolveCapability:
    """Tests for resolve_capability."""

    def test_stored_value_wins(self):
        ident = identity(UserRole.EMPLOYEE, assignLeads=True)
        assert resolve_capability(ident, "assignLeads") is True

    def test_non_boolean_rejected(self):
        ident = identity(UserRole.ADMIN, createEmployee="all")
        with pytest.raises(ScopeConfigurationError):
            resolve_capability(ident, "createEmployee")
