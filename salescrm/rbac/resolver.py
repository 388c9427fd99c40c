# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Single-resource access decisions."""

import logging

from salescrm.models.enums import Action, ResourceType, Scope
from salescrm.rbac.errors import ScopeConfigurationError
from salescrm.rbac.identity import (
    Decision,
    DenyReason,
    Identity,
    OwnershipFact,
    axes_for,
)
from salescrm.rbac.policy import resolve_capability, resolve_scope

logger = logging.getLogger(__name__)


def can_act(
    identity: Identity,
    resource_type: ResourceType,
    action: Action,
    fact: OwnershipFact,
) -> Decision:
    """Decide whether an identity may perform an action on one resource.

    The effective scope is matched against the resource's ownership fact:

    - NONE denies, except that anyone may view their own user record
    - ALL allows
    - CREATED matches the creator
    - ASSIGNED matches the assignee
    - SUBORDINATES (admins only) matches the admin or any of their employees
      as creator or assignee

    Communications and follow-ups are matched against the linked lead or
    customer, except for CREATED which matches whoever wrote the record.

    Misconfigured permissions deny and are logged; they never raise.
    """
    try:
        scope = resolve_scope(identity, resource_type, action)
    except ScopeConfigurationError as e:
        logger.error(f"Denying {action.value} on {resource_type.value}: {e}")
        return Decision.deny(DenyReason.MISCONFIGURED)

    if scope is Scope.NONE:
        if (
            resource_type is ResourceType.USER
            and action is Action.VIEW
            and fact.assignee_id == identity.id
        ):
            return Decision.allow(scope)
        return Decision.deny(DenyReason.NO_ACCESS, scope)

    if scope is Scope.ALL:
        return Decision.allow(scope)

    axes = axes_for(resource_type)
    if scope is Scope.CREATED:
        matched = fact.value_of(axes.created) == identity.id
    elif scope is Scope.ASSIGNED:
        matched = fact.value_of(axes.owner_assignee) == identity.id
    else:
        owners = {
            fact.value_of(axes.owner_creator),
            fact.value_of(axes.owner_assignee),
        }
        owners.discard(None)
        matched = identity.id in owners or not owners.isdisjoint(
            identity.subordinate_ids
        )

    if matched:
        return Decision.allow(scope)
    return Decision.deny(DenyReason.OUT_OF_SCOPE, scope)


def has_capability(identity: Identity, key: str) -> Decision:
    """Check a boolean capability such as ``createLeads``."""
    try:
        granted = resolve_capability(identity, key)
    except ScopeConfigurationError as e:
        logger.error(f"Denying capability {key}: {e}")
        return Decision.deny(DenyReason.MISCONFIGURED)
    if granted:
        return Decision.allow()
    return Decision.deny(DenyReason.MISSING_CAPABILITY)
