# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Communication history service."""

import datetime
import uuid

from sqlalchemy.orm import Session, joinedload

from salescrm.models import Action, Communication, ResourceType
from salescrm.rbac.identity import Identity
from salescrm.rbac.predicates import build_filter
from salescrm.schemas.communication import CommunicationCreate
from salescrm.services.scope_filters import apply_scope_filter


def get_communications(
    db: Session,
    identity: Identity,
    lead_id: uuid.UUID | None = None,
    customer_id: uuid.UUID | None = None,
) -> list[Communication]:
    """Get the communications visible to an identity, newest first."""
    query = db.query(Communication)
    predicate = build_filter(identity, ResourceType.COMMUNICATION, Action.VIEW)
    query = apply_scope_filter(query, ResourceType.COMMUNICATION, predicate)
    if lead_id:
        query = query.filter(Communication.lead_id == lead_id)
    if customer_id:
        query = query.filter(Communication.customer_id == customer_id)
    return query.order_by(Communication.occurred_at.desc()).all()


def get_communication(db: Session, communication_id: uuid.UUID) -> Communication | None:
    """Get a communication by ID with its lead or customer loaded."""
    return (
        db.query(Communication)
        .options(joinedload(Communication.lead), joinedload(Communication.customer))
        .filter(Communication.id == communication_id)
        .first()
    )


def create_communication(
    db: Session, data: CommunicationCreate, creator_id: uuid.UUID
) -> Communication:
    """Log a communication against a lead or a customer."""
    communication = Communication(
        type=data.type,
        notes=data.notes,
        subject=data.subject,
        duration=data.duration,
        occurred_at=data.occurred_at or datetime.datetime.utcnow(),
        lead_id=data.lead_id,
        customer_id=data.customer_id,
        created_by_id=creator_id,
    )
    db.add(communication)
    db.commit()
    db.refresh(communication)
    return communication
