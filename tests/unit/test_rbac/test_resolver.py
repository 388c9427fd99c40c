# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for single-resource access decisions."""

import logging
import uuid

import pytest

from salescrm.models.enums import Action, ResourceType, Scope, UserRole
from salescrm.rbac.identity import Decision, DenyReason, Identity, OwnershipFact
from salescrm.rbac.resolver import can_act, has_capability

ADMIN_A = uuid.uuid4()
EMPLOYEE_1 = uuid.uuid4()  # belongs to ADMIN_A
EMPLOYEE_2 = uuid.uuid4()  # no admin
EMPLOYEE_3 = uuid.uuid4()  # belongs to another admin


@pytest.fixture
def admin_a() -> Identity:
    return Identity(
        id=ADMIN_A,
        role=UserRole.ADMIN,
        permissions={"viewCustomers": "subordinates", "viewCommunications": "subordinates"},
        subordinate_ids=frozenset({EMPLOYEE_1}),
    )


@pytest.fixture
def employee_1() -> Identity:
    return Identity(id=EMPLOYEE_1, role=UserRole.EMPLOYEE)


class TestScopes:
    """Each scope value as a predicate on the ownership fact."""

    def test_none_denies(self, employee_1):
        fact = OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=EMPLOYEE_1)
        decision = can_act(employee_1, ResourceType.LEAD, Action.DELETE, fact)
        assert not decision
        assert decision.reason is DenyReason.NO_ACCESS

    def test_all_allows_orphans(self):
        dev = Identity(id=uuid.uuid4(), role=UserRole.DEVELOPER)
        decision = can_act(dev, ResourceType.LEAD, Action.DELETE, OwnershipFact())
        assert decision
        assert decision.scope is Scope.ALL

    def test_created(self):
        ident = Identity(id=ADMIN_A, role=UserRole.ADMIN)
        own = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1)
        other = OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=ADMIN_A)
        assert can_act(ident, ResourceType.LEAD, Action.EDIT, own)
        decision = can_act(ident, ResourceType.LEAD, Action.EDIT, other)
        assert decision.reason is DenyReason.OUT_OF_SCOPE

    def test_assigned(self, employee_1):
        assigned = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1)
        created_only = OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=None)
        assert can_act(employee_1, ResourceType.LEAD, Action.VIEW, assigned)
        assert not can_act(employee_1, ResourceType.LEAD, Action.VIEW, created_only)

    def test_unassigned_resource_never_matches_assigned(self, employee_1):
        assert not can_act(employee_1, ResourceType.LEAD, Action.VIEW, OwnershipFact())

    def test_subordinates_matches_self_and_subordinates(self, admin_a):
        for fact in (
            OwnershipFact(creator_id=ADMIN_A),
            OwnershipFact(assignee_id=ADMIN_A),
            OwnershipFact(creator_id=EMPLOYEE_1),
            OwnershipFact(creator_id=EMPLOYEE_3, assignee_id=EMPLOYEE_1),
        ):
            assert can_act(admin_a, ResourceType.CUSTOMER, Action.VIEW, fact)

    def test_subordinates_excludes_others(self, admin_a):
        fact = OwnershipFact(creator_id=EMPLOYEE_2, assignee_id=EMPLOYEE_3)
        decision = can_act(admin_a, ResourceType.CUSTOMER, Action.VIEW, fact)
        assert decision.reason is DenyReason.OUT_OF_SCOPE

    def test_subordinates_with_no_employees(self):
        lonely = Identity(id=ADMIN_A, role=UserRole.ADMIN)
        fact = OwnershipFact(creator_id=EMPLOYEE_1)
        assert not can_act(lonely, ResourceType.LEAD, Action.VIEW, fact)


class TestSelfView:
    """Everyone may view their own user record."""

    def test_employee_views_self(self, employee_1):
        fact = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1)
        decision = can_act(employee_1, ResourceType.USER, Action.VIEW, fact)
        assert decision
        assert decision.scope is Scope.NONE

    def test_employee_cannot_view_others(self, employee_1):
        fact = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_2)
        assert not can_act(employee_1, ResourceType.USER, Action.VIEW, fact)

    def test_only_for_view(self, employee_1):
        fact = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1)
        assert not can_act(employee_1, ResourceType.USER, Action.EDIT, fact)
        assert not can_act(employee_1, ResourceType.USER, Action.DELETE, fact)

    def test_only_for_users(self, employee_1):
        ident = Identity(id=EMPLOYEE_1, role=UserRole.EMPLOYEE, permissions={"viewLeads": "none"})
        fact = OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=EMPLOYEE_1)
        assert not can_act(ident, ResourceType.LEAD, Action.VIEW, fact)


class TestFailClosed:
    """Misconfigured permissions deny without raising."""

    @pytest.mark.parametrize(
        ("role", "value"),
        [
            (UserRole.ADMIN, "everything"),
            (UserRole.ADMIN, True),
            (UserRole.ADMIN, 3),
            (UserRole.EMPLOYEE, "subordinates"),
            (UserRole.DEVELOPER, "subordinates"),
        ],
    )
    def test_denies_and_logs(self, caplog, role, value):
        ident = Identity(id=uuid.uuid4(), role=role, permissions={"viewLeads": value})
        fact = OwnershipFact(creator_id=ident.id, assignee_id=ident.id)
        with caplog.at_level(logging.ERROR, logger="salescrm.rbac.resolver"):
            decision = can_act(ident, ResourceType.LEAD, Action.VIEW, fact)
        assert decision == Decision.deny(DenyReason.MISCONFIGURED)
        assert "viewLeads" in caplog.text

    def test_misconfigured_user_view_keeps_no_self_view(self):
        ident = Identity(
            id=EMPLOYEE_1, role=UserRole.EMPLOYEE, permissions={"viewUsers": "bogus"}
        )
        fact = OwnershipFact(assignee_id=EMPLOYEE_1)
        assert not can_act(ident, ResourceType.USER, Action.VIEW, fact)


class TestCommunications:
    """Communications follow the linked contact's ownership."""

    def test_assigned_reads_contact(self, employee_1):
        fact = OwnershipFact(
            creator_id=EMPLOYEE_3,
            contact=OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1),
        )
        assert can_act(employee_1, ResourceType.COMMUNICATION, Action.VIEW, fact)

    def test_assigned_ignores_own_logging(self, employee_1):
        fact = OwnershipFact(
            creator_id=EMPLOYEE_1,
            contact=OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_3),
        )
        assert not can_act(employee_1, ResourceType.COMMUNICATION, Action.VIEW, fact)

    def test_created_reads_logger(self):
        ident = Identity(
            id=EMPLOYEE_1,
            role=UserRole.EMPLOYEE,
            permissions={"viewCommunications": "created"},
        )
        logged = OwnershipFact(
            creator_id=EMPLOYEE_1, contact=OwnershipFact(creator_id=ADMIN_A)
        )
        contact_only = OwnershipFact(
            creator_id=EMPLOYEE_3, contact=OwnershipFact(creator_id=EMPLOYEE_1)
        )
        assert can_act(ident, ResourceType.COMMUNICATION, Action.VIEW, logged)
        assert not can_act(ident, ResourceType.COMMUNICATION, Action.VIEW, contact_only)

    def test_missing_contact_only_matches_all(self, admin_a):
        fact = OwnershipFact(creator_id=ADMIN_A)
        assert not can_act(admin_a, ResourceType.COMMUNICATION, Action.VIEW, fact)
        dev = Identity(id=uuid.uuid4(), role=UserRole.DEVELOPER)
        assert can_act(dev, ResourceType.COMMUNICATION, Action.VIEW, fact)


class TestScenarios:
    """Walkthroughs of the admin / employee setup."""

    def test_customer_visibility_for_admin(self, admin_a, employee_1):
        created_by_e1 = OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=None)
        created_by_e2 = OwnershipFact(creator_id=EMPLOYEE_2, assignee_id=None)
        assigned_to_e1 = OwnershipFact(creator_id=ADMIN_A, assignee_id=EMPLOYEE_1)

        assert can_act(admin_a, ResourceType.CUSTOMER, Action.VIEW, created_by_e1)
        assert not can_act(admin_a, ResourceType.CUSTOMER, Action.VIEW, created_by_e2)
        assert can_act(admin_a, ResourceType.CUSTOMER, Action.VIEW, assigned_to_e1)
        assert can_act(employee_1, ResourceType.CUSTOMER, Action.VIEW, assigned_to_e1)

    def test_communication_on_subordinate_lead(self, admin_a):
        fact = OwnershipFact(
            creator_id=EMPLOYEE_3,
            contact=OwnershipFact(creator_id=EMPLOYEE_1, assignee_id=EMPLOYEE_1),
        )
        assert can_act(admin_a, ResourceType.COMMUNICATION, Action.VIEW, fact)


class TestHasCapability:
    """Tests for has_capability."""

    def test_default(self):
        ident = Identity(id=uuid.uuid4(), role=UserRole.EMPLOYEE)
        assert has_capability(ident, "createLeads")
        decision = has_capability(ident, "assignLeads")
        assert decision.reason is DenyReason.MISSING_CAPABILITY

    def test_stored_override(self):
        ident = Identity(
            id=uuid.uuid4(), role=UserRole.ADMIN, permissions={"createEmployee": False}
        )
        assert not has_capability(ident, "createEmployee")

    def test_misconfigured(self, caplog):
        ident = Identity(
            id=uuid.uuid4(), role=UserRole.ADMIN, permissions={"createEmployee": "yes"}
        )
        with caplog.at_level(logging.ERROR):
            decision = has_capability(ident, "createEmployee")
        assert decision.reason is DenyReason.MISCONFIGURED
        assert "createEmployee" in caplog.text
