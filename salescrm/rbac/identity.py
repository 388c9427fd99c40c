# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Value types shared by the resolver, the predicate builder and the quota check."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from salescrm.models.enums import ResourceType, Scope, UserRole


@dataclass(frozen=True)
class Identity:
    """The requesting user as seen by the access core.

    ``subordinate_ids`` is the admin's subordinate set, materialized once when
    the identity is loaded. It is empty for every other role.
    """

    id: uuid.UUID
    role: UserRole
    permissions: Mapping[str, Any] = field(default_factory=dict)
    subordinate_ids: frozenset[uuid.UUID] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", MappingProxyType(dict(self.permissions)))
        object.__setattr__(self, "subordinate_ids", frozenset(self.subordinate_ids))


class FactField(str, Enum):
    """Ownership axes a predicate can test."""

    CREATOR = "creator"
    ASSIGNEE = "assignee"
    CONTACT_CREATOR = "contact_creator"
    CONTACT_ASSIGNEE = "contact_assignee"


@dataclass(frozen=True)
class OwnershipFact:
    """Who created a resource and who it is assigned to.

    For communications and follow-ups ``contact`` holds the fact of the
    linked lead or customer. For users ``assignee_id`` is the user's own id.
    """

    creator_id: uuid.UUID | None = None
    assignee_id: uuid.UUID | None = None
    contact: OwnershipFact | None = None

    def value_of(self, fact_field: FactField) -> uuid.UUID | None:
        if fact_field is FactField.CREATOR:
            return self.creator_id
        if fact_field is FactField.ASSIGNEE:
            return self.assignee_id
        if self.contact is None:
            return None
        if fact_field is FactField.CONTACT_CREATOR:
            return self.contact.creator_id
        return self.contact.assignee_id


@dataclass(frozen=True)
class OwnershipAxes:
    """Which fact fields each scope reads for one resource type."""

    created: FactField
    owner_creator: FactField
    owner_assignee: FactField


DIRECT_AXES = OwnershipAxes(
    created=FactField.CREATOR,
    owner_creator=FactField.CREATOR,
    owner_assignee=FactField.ASSIGNEE,
)

# "Who logged it" for created, "who owns the linked contact" otherwise
LINKED_CONTACT_AXES = OwnershipAxes(
    created=FactField.CREATOR,
    owner_creator=FactField.CONTACT_CREATOR,
    owner_assignee=FactField.CONTACT_ASSIGNEE,
)


def axes_for(resource_type: ResourceType) -> OwnershipAxes:
    """Return the ownership axes used for a resource type."""
    if resource_type in (ResourceType.COMMUNICATION, ResourceType.FOLLOW_UP):
        return LINKED_CONTACT_AXES
    return DIRECT_AXES


class DenyReason(str, Enum):
    """Why a decision denied access."""

    NO_ACCESS = "no access"
    OUT_OF_SCOPE = "out of scope"
    MISCONFIGURED = "misconfigured"
    MISSING_CAPABILITY = "missing capability"
    NOT_AN_ADMIN = "not an admin"
    LIMIT_REACHED = "limit reached"


@dataclass(frozen=True)
class Decision:
    """Outcome of an access check. Truthy when access is allowed."""

    allowed: bool
    reason: DenyReason | None = None
    scope: Scope | None = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, scope: Scope | None = None) -> Decision:
        return cls(allowed=True, scope=scope)

    @classmethod
    def deny(cls, reason: DenyReason, scope: Scope | None = None) -> Decision:
        return cls(allowed=False, reason=reason, scope=scope)
