# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Follow-up API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from salescrm.api.deps import (
    ensure_allowed,
    ensure_contact_visible,
    get_db,
    get_identity,
    require_capability,
)
from salescrm.models import Action, FollowUp, ResourceType
from salescrm.rbac.identity import Identity
from salescrm.rbac.resolver import can_act
from salescrm.schemas.follow_up import (
    FollowUpCreate,
    FollowUpResponse,
    FollowUpUpdate,
)
from salescrm.services import follow_up_service
from salescrm.services.access_service import fact_for_follow_up

router = APIRouter()


def get_follow_up_for_action(
    db: Session, identity: Identity, follow_up_id: uuid.UUID, action: Action
) -> FollowUp:
    """Load a follow-up and check the identity may act on it."""
    follow_up = follow_up_service.get_follow_up(db, follow_up_id)
    if not follow_up:
        raise HTTPException(status_code=404, detail="Follow-up not found")
    fact = fact_for_follow_up(follow_up)
    ensure_allowed(can_act(identity, ResourceType.FOLLOW_UP, action, fact))
    return follow_up


@router.get("", response_model=list[FollowUpResponse])
def list_follow_ups(
    lead_id: uuid.UUID | None = None,
    customer_id: uuid.UUID | None = None,
    pending: bool | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[FollowUp]:
    """List the follow-ups visible to the current user, soonest first."""
    return follow_up_service.get_follow_ups(
        db, identity, lead_id=lead_id, customer_id=customer_id, pending=pending
    )


@router.post("", response_model=FollowUpResponse, status_code=status.HTTP_201_CREATED)
def create_follow_up(
    data: FollowUpCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("addFollowUps")),
) -> FollowUp:
    """Schedule a follow-up. The linked lead or customer must be visible."""
    ensure_contact_visible(db, identity, data.lead_id, data.customer_id)
    return follow_up_service.create_follow_up(db, data, identity.id)


@router.get("/{follow_up_id}", response_model=FollowUpResponse)
def get_follow_up(
    follow_up_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> FollowUp:
    return get_follow_up_for_action(db, identity, follow_up_id, Action.VIEW)


@router.patch("/{follow_up_id}", response_model=FollowUpResponse)
def update_follow_up(
    follow_up_id: uuid.UUID,
    data: FollowUpUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> FollowUp:
    """Reschedule or complete a follow-up."""
    follow_up = get_follow_up_for_action(db, identity, follow_up_id, Action.EDIT)
    return follow_up_service.update_follow_up(db, follow_up, data)


@router.delete("/{follow_up_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_follow_up(
    follow_up_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> None:
    """Delete a follow-up."""
    follow_up = get_follow_up_for_action(db, identity, follow_up_id, Action.DELETE)
    follow_up_service.delete_follow_up(db, follow_up)
