# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Bridges database rows and the access core.

Loads the requesting identity and extracts ownership facts from each
resource type. All store lookups the resolver needs happen here, before any
decision is made.
"""

from sqlalchemy.orm import Session

from salescrm.models import Communication, Customer, FollowUp, Lead, User, UserRole
from salescrm.rbac.hierarchy import HierarchyDirectory
from salescrm.rbac.identity import Identity, OwnershipFact


def load_identity(db: Session, user: User) -> Identity:
    """Build the identity of an authenticated user."""
    subordinate_ids: frozenset = frozenset()
    if user.role == UserRole.ADMIN:
        subordinate_ids = HierarchyDirectory(db).subordinates_of(user.id)
    return Identity(
        id=user.id,
        role=user.role,
        permissions=user.permissions or {},
        subordinate_ids=subordinate_ids,
    )


def fact_for_lead(lead: Lead) -> OwnershipFact:
    """Ownership of a lead."""
    return OwnershipFact(creator_id=lead.created_by_id, assignee_id=lead.assigned_to_id)


def fact_for_customer(customer: Customer) -> OwnershipFact:
    """Ownership of a customer."""
    return OwnershipFact(
        creator_id=customer.created_by_id, assignee_id=customer.assigned_to_id
    )


def _contact_fact(record: Communication | FollowUp) -> OwnershipFact | None:
    if record.lead is not None:
        return fact_for_lead(record.lead)
    if record.customer is not None:
        return fact_for_customer(record.customer)
    return None


def fact_for_communication(communication: Communication) -> OwnershipFact:
    """Ownership of a communication, including the linked lead or customer."""
    return OwnershipFact(
        creator_id=communication.created_by_id, contact=_contact_fact(communication)
    )


def fact_for_follow_up(follow_up: FollowUp) -> OwnershipFact:
    """Ownership of a follow-up, including the linked lead or customer."""
    return OwnershipFact(
        creator_id=follow_up.created_by_id, contact=_contact_fact(follow_up)
    )


def fact_for_user(user: User) -> OwnershipFact:
    """Ownership of a user account.

    The account itself is the assignee. An employee is credited to the admin
    it belongs to, whoever actually created the row.
    """
    return OwnershipFact(
        creator_id=user.created_by_admin_id or user.created_by_id,
        assignee_id=user.id,
    )
