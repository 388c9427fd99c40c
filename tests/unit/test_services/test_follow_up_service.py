# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for follow_up_service."""

import datetime

import pytest
from pydantic import ValidationError

from salescrm.models import Action, FollowUp, ResourceType, UserRole
from salescrm.rbac.resolver import can_act
from salescrm.schemas.customer import CustomerCreate
from salescrm.schemas.follow_up import FollowUpCreate, FollowUpUpdate
from salescrm.schemas.lead import LeadCreate
from salescrm.services import customer_service, follow_up_service, lead_service
from salescrm.services.access_service import fact_for_follow_up, load_identity

MONDAY = datetime.datetime(2027, 1, 4, 9, 0)


def schedule(db_session, creator, when=MONDAY, **contact) -> FollowUp:
    return follow_up_service.create_follow_up(
        db_session,
        FollowUpCreate(notes="Call back", next_call_at=when, **contact),
        creator.id,
    )


def test_requires_exactly_one_contact():
    with pytest.raises(ValidationError):
        FollowUpCreate(notes="Call back", next_call_at=MONDAY)


def test_requires_notes(db_session, employee):
    lead = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    with pytest.raises(ValidationError):
        FollowUpCreate(notes="", next_call_at=MONDAY, lead_id=lead.id)


def test_listing_is_scoped_and_ordered(db_session, make_user, admin_user, employee):
    outsider = make_user("Oscar", UserRole.EMPLOYEE)
    mine = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    theirs = lead_service.create_lead(db_session, LeadCreate(name="Initech"), outsider.id)
    wednesday = MONDAY + datetime.timedelta(days=2)
    later = schedule(db_session, employee, wednesday, lead_id=mine.id)
    sooner = schedule(db_session, employee, lead_id=mine.id)
    schedule(db_session, outsider, lead_id=theirs.id)

    employee_view = follow_up_service.get_follow_ups(
        db_session, load_identity(db_session, employee)
    )
    admin_view = follow_up_service.get_follow_ups(
        db_session, load_identity(db_session, admin_user)
    )
    assert [f.id for f in employee_view] == [sooner.id, later.id]
    assert {f.id for f in admin_view} == {sooner.id, later.id}


def test_pending_and_contact_filters(db_session, employee):
    lead = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    customer = customer_service.create_customer(
        db_session, CustomerCreate(name="Globex"), employee.id
    )
    done = schedule(db_session, employee, lead_id=lead.id)
    follow_up_service.update_follow_up(
        db_session, done, FollowUpUpdate(is_completed=True)
    )
    open_one = schedule(db_session, employee, customer_id=customer.id)
    identity = load_identity(db_session, employee)

    pending = follow_up_service.get_follow_ups(db_session, identity, pending=True)
    completed = follow_up_service.get_follow_ups(db_session, identity, pending=False)
    on_lead = follow_up_service.get_follow_ups(db_session, identity, lead_id=lead.id)
    assert [f.id for f in pending] == [open_one.id]
    assert [f.id for f in completed] == [done.id]
    assert [f.id for f in on_lead] == [done.id]


def test_update_keeps_required_fields(db_session, employee):
    lead = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    follow_up = schedule(db_session, employee, lead_id=lead.id)
    updated = follow_up_service.update_follow_up(
        db_session, follow_up, FollowUpUpdate(notes=None, next_call_at=None)
    )
    assert updated.notes == "Call back"
    assert updated.next_call_at == MONDAY


def test_scheduler_can_edit_after_reassignment(
    db_session, make_user, admin_user, employee
):
    """Editing follows who scheduled the call, viewing follows the contact."""
    colleague = make_user("Colin", UserRole.EMPLOYEE, admin=admin_user)
    lead = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    follow_up = schedule(db_session, employee, lead_id=lead.id)
    lead_service.assign_lead(db_session, lead, colleague.id)

    fact = fact_for_follow_up(follow_up_service.get_follow_up(db_session, follow_up.id))
    identity = load_identity(db_session, employee)
    assert can_act(identity, ResourceType.FOLLOW_UP, Action.EDIT, fact)
    assert not can_act(identity, ResourceType.FOLLOW_UP, Action.VIEW, fact)
    assert can_act(
        load_identity(db_session, colleague), ResourceType.FOLLOW_UP, Action.VIEW, fact
    )


def test_deleting_lead_removes_follow_ups(db_session, employee):
    lead = lead_service.create_lead(db_session, LeadCreate(name="Acme"), employee.id)
    schedule(db_session, employee, lead_id=lead.id)
    lead_service.delete_lead(db_session, lead)
    assert db_session.query(FollowUp).count() == 0
