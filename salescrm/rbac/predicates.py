# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Listing filters equivalent to the single-resource decisions.

``build_filter`` returns a small, storage independent expression tree. A
resource is in the listing exactly when ``can_act`` allows it, which is
what ``Predicate.matches`` evaluates in memory. The storage layer translates
the same tree into SQL (see ``salescrm.services.scope_filters``).
"""

import logging
import uuid
from dataclasses import dataclass

from salescrm.models.enums import Action, ResourceType, Scope
from salescrm.rbac.errors import ScopeConfigurationError
from salescrm.rbac.identity import FactField, Identity, OwnershipFact, axes_for
from salescrm.rbac.policy import resolve_scope

logger = logging.getLogger(__name__)


class Predicate:
    """Base class of filter expressions."""

    def matches(self, fact: OwnershipFact) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class MatchAll(Predicate):
    def matches(self, fact: OwnershipFact) -> bool:
        return True


@dataclass(frozen=True)
class MatchNone(Predicate):
    def matches(self, fact: OwnershipFact) -> bool:
        return False


@dataclass(frozen=True)
class Equals(Predicate):
    """Field equals a fixed id. A NULL field never matches."""

    field: FactField
    value: uuid.UUID

    def matches(self, fact: OwnershipFact) -> bool:
        current = fact.value_of(self.field)
        return current is not None and current == self.value


@dataclass(frozen=True)
class OneOf(Predicate):
    """Field is a member of a fixed id set. An empty set matches nothing."""

    field: FactField
    values: frozenset[uuid.UUID]

    def matches(self, fact: OwnershipFact) -> bool:
        current = fact.value_of(self.field)
        return current is not None and current in self.values


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Disjunction of terms."""

    terms: tuple[Predicate, ...]

    def matches(self, fact: OwnershipFact) -> bool:
        return any(term.matches(fact) for term in self.terms)


MATCH_ALL = MatchAll()
MATCH_NONE = MatchNone()


def build_filter(
    identity: Identity, resource_type: ResourceType, action: Action
) -> Predicate:
    """Build the listing filter for an identity, resource type and action."""
    try:
        scope = resolve_scope(identity, resource_type, action)
    except ScopeConfigurationError as e:
        logger.error(f"Filtering out all {resource_type.value} rows: {e}")
        return MATCH_NONE

    if scope is Scope.NONE:
        if resource_type is ResourceType.USER and action is Action.VIEW:
            return Equals(FactField.ASSIGNEE, identity.id)
        return MATCH_NONE

    if scope is Scope.ALL:
        return MATCH_ALL

    axes = axes_for(resource_type)
    if scope is Scope.CREATED:
        return Equals(axes.created, identity.id)
    if scope is Scope.ASSIGNED:
        return Equals(axes.owner_assignee, identity.id)

    subordinates = frozenset(identity.subordinate_ids)
    return AnyOf(
        (
            Equals(axes.owner_creator, identity.id),
            Equals(axes.owner_assignee, identity.id),
            OneOf(axes.owner_creator, subordinates),
            OneOf(axes.owner_assignee, subordinates),
        )
    )


def owned_by(resource_type: ResourceType, user_ids: frozenset[uuid.UUID]) -> Predicate:
    """Rows created by or assigned to any of the given users."""
    axes = axes_for(resource_type)
    return AnyOf(
        (OneOf(axes.owner_creator, user_ids), OneOf(axes.owner_assignee, user_ids))
    )
