# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Follow-up scheduling service."""

import uuid

from sqlalchemy.orm import Session, joinedload

from salescrm.models import Action, FollowUp, ResourceType
from salescrm.rbac.identity import Identity
from salescrm.rbac.predicates import build_filter
from salescrm.schemas.follow_up import FollowUpCreate, FollowUpUpdate
from salescrm.services.scope_filters import apply_scope_filter

REQUIRED_FIELDS = {"notes", "next_call_at", "is_completed"}


def get_follow_ups(
    db: Session,
    identity: Identity,
    lead_id: uuid.UUID | None = None,
    customer_id: uuid.UUID | None = None,
    pending: bool | None = None,
) -> list[FollowUp]:
    """Get the follow-ups visible to an identity, soonest first.

    ``pending=True`` keeps open follow-ups only, ``pending=False`` completed
    ones.
    """
    query = db.query(FollowUp)
    predicate = build_filter(identity, ResourceType.FOLLOW_UP, Action.VIEW)
    query = apply_scope_filter(query, ResourceType.FOLLOW_UP, predicate)
    if lead_id:
        query = query.filter(FollowUp.lead_id == lead_id)
    if customer_id:
        query = query.filter(FollowUp.customer_id == customer_id)
    if pending is not None:
        query = query.filter(FollowUp.is_completed.is_(not pending))
    return query.order_by(FollowUp.next_call_at).all()


def get_follow_up(db: Session, follow_up_id: uuid.UUID) -> FollowUp | None:
    """Get a follow-up by ID with its lead or customer loaded."""
    return (
        db.query(FollowUp)
        .options(joinedload(FollowUp.lead), joinedload(FollowUp.customer))
        .filter(FollowUp.id == follow_up_id)
        .first()
    )


def create_follow_up(
    db: Session, data: FollowUpCreate, creator_id: uuid.UUID
) -> FollowUp:
    """Schedule a follow-up against a lead or a customer."""
    follow_up = FollowUp(
        notes=data.notes,
        next_call_at=data.next_call_at,
        lead_id=data.lead_id,
        customer_id=data.customer_id,
        created_by_id=creator_id,
    )
    db.add(follow_up)
    db.commit()
    db.refresh(follow_up)
    return follow_up


def update_follow_up(
    db: Session, follow_up: FollowUp, data: FollowUpUpdate
) -> FollowUp:
    """Reschedule, re-word or complete a follow-up."""
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(follow_up, field, value)
    db.commit()
    db.refresh(follow_up)
    return follow_up


def delete_follow_up(db: Session, follow_up: FollowUp) -> None:
    db.delete(follow_up)
    db.commit()
