# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Communication history API endpoints."""

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
from salescrm.models import Action, Communication, ResourceType
from salescrm.rbac.identity import Identity
from salescrm.rbac.resolver import can_act
from salescrm.schemas.communication import CommunicationCreate, CommunicationResponse
from salescrm.services import communication_service
from salescrm.services.access_service import fact_for_communication

router = APIRouter()


@router.get("", response_model=list[CommunicationResponse])
def list_communications(
    lead_id: uuid.UUID | None = None,
    customer_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[Communication]:
    """List the communications visible to the current user."""
    return communication_service.get_communications(
        db, identity, lead_id=lead_id, customer_id=customer_id
    )


@router.post(
    "", response_model=CommunicationResponse, status_code=status.HTTP_201_CREATED
)
def create_communication(
    data: CommunicationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("addCommunications")),
) -> Communication:
    """Log a communication. The linked lead or customer must be visible."""
    ensure_contact_visible(db, identity, data.lead_id, data.customer_id)
    return communication_service.create_communication(db, data, identity.id)


@router.get("/{communication_id}", response_model=CommunicationResponse)
def get_communication(
    communication_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> Communication:
    """Get a communication by ID."""
    communication = communication_service.get_communication(db, communication_id)
    if not communication:
        raise HTTPException(status_code=404, detail="Communication not found")
    ensure_allowed(
        can_act(
            identity,
            ResourceType.COMMUNICATION,
            Action.VIEW,
            fact_for_communication(communication),
        )
    )
    return communication
