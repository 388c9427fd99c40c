# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Catalog of stored permission keys."""

from salescrm.models.enums import Action, ResourceType

# Keys whose stored value is a Scope
SCOPED_PERMISSIONS = [
    # Leads
    {
        "code": "viewLeads",
        "resource": ResourceType.LEAD,
        "action": Action.VIEW,
        "description": "View leads",
    },
    {
        "code": "editLeads",
        "resource": ResourceType.LEAD,
        "action": Action.EDIT,
        "description": "Edit leads",
    },
    {
        "code": "deleteLeads",
        "resource": ResourceType.LEAD,
        "action": Action.DELETE,
        "description": "Delete leads",
    },
    # Customers
    {
        "code": "viewCustomers",
        "resource": ResourceType.CUSTOMER,
        "action": Action.VIEW,
        "description": "View customers",
    },
    {
        "code": "editCustomers",
        "resource": ResourceType.CUSTOMER,
        "action": Action.EDIT,
        "description": "Edit customers",
    },
    {
        "code": "deleteCustomers",
        "resource": ResourceType.CUSTOMER,
        "action": Action.DELETE,
        "description": "Delete customers",
    },
    # Communications
    {
        "code": "viewCommunications",
        "resource": ResourceType.COMMUNICATION,
        "action": Action.VIEW,
        "description": "View communication history",
    },
    # Follow-ups
    {
        "code": "viewFollowUps",
        "resource": ResourceType.FOLLOW_UP,
        "action": Action.VIEW,
        "description": "View scheduled follow-ups",
    },
    {
        "code": "editFollowUps",
        "resource": ResourceType.FOLLOW_UP,
        "action": Action.EDIT,
        "description": "Reschedule or complete follow-ups",
    },
    {
        "code": "deleteFollowUps",
        "resource": ResourceType.FOLLOW_UP,
        "action": Action.DELETE,
        "description": "Delete follow-ups",
    },
    # Users
    {
        "code": "viewUsers",
        "resource": ResourceType.USER,
        "action": Action.VIEW,
        "description": "View user accounts",
    },
    {
        "code": "editUsers",
        "resource": ResourceType.USER,
        "action": Action.EDIT,
        "description": "Edit user accounts",
    },
    {
        "code": "deleteUsers",
        "resource": ResourceType.USER,
        "action": Action.DELETE,
        "description": "Delete user accounts",
    },
]

# Keys whose stored value is a bool
CAPABILITY_PERMISSIONS = [
    {"code": "createLeads", "description": "Create leads"},
    {"code": "assignLeads", "description": "Assign leads to other users"},
    {"code": "createCustomers", "description": "Create customers"},
    {"code": "assignCustomers", "description": "Assign customers to other users"},
    {"code": "manageRenewals", "description": "Record customer renewals"},
    {"code": "addCommunications", "description": "Log communications"},
    {"code": "addFollowUps", "description": "Schedule follow-ups"},
    {"code": "playRecordings", "description": "Play call recordings"},
    {"code": "downloadRecordings", "description": "Download call recordings"},
    {"code": "createAdmin", "description": "Create admin accounts"},
    {"code": "createEmployee", "description": "Create employee accounts"},
    {
        "code": "editUserPermissions",
        "description": "Change the stored permissions of other users",
    },
    {"code": "clearSystemData", "description": "Delete every lead at once"},
]

SCOPED_PERMISSION_KEYS: dict[tuple[ResourceType, Action], str] = {
    (p["resource"], p["action"]): p["code"] for p in SCOPED_PERMISSIONS
}
CAPABILITY_KEYS: frozenset[str] = frozenset(p["code"] for p in CAPABILITY_PERMISSIONS)


def permission_key(resource_type: ResourceType, action: Action) -> str:
    """Return the stored permission key for a scoped action.

    Raises ValueError for pairs that have no scope, e.g. deleting a
    communication.
    """
    try:
        return SCOPED_PERMISSION_KEYS[(resource_type, action)]
    except KeyError:
        raise ValueError(
            f"No scoped permission for {action.value} on {resource_type.value}"
        ) from None
