# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Lead service."""

import logging
import uuid
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from salescrm.models import (
    Action,
    Communication,
    FollowUp,
    Lead,
    LeadStatus,
    ResourceType,
)
from salescrm.rbac.identity import Identity
from salescrm.rbac.predicates import build_filter
from salescrm.schemas.lead import LeadCreate, LeadUpdate
from salescrm.services import user_service
from salescrm.services.scope_filters import apply_scope_filter

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"name", "status"}


def get_leads(
    db: Session,
    identity: Identity,
    status: LeadStatus | None = None,
    assigned_to_id: uuid.UUID | None = None,
    search: str | None = None,
) -> list[Lead]:
    """Get the leads visible to an identity, with optional filters."""
    query = db.query(Lead)
    predicate = build_filter(identity, ResourceType.LEAD, Action.VIEW)
    query = apply_scope_filter(query, ResourceType.LEAD, predicate)
    if status:
        query = query.filter(Lead.status == status)
    if assigned_to_id:
        query = query.filter(Lead.assigned_to_id == assigned_to_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                Lead.name.ilike(pattern),
                Lead.email.ilike(pattern),
                Lead.mobile.ilike(pattern),
            )
        )
    return query.order_by(Lead.created_at.desc()).all()


def get_lead(db: Session, lead_id: uuid.UUID) -> Lead | None:
    """Get a lead by ID."""
    return db.query(Lead).filter(Lead.id == lead_id).first()


def _new_lead(db: Session, data: LeadCreate, creator_id: uuid.UUID) -> Lead:
    assigned_to_id = data.assigned_to_id or creator_id
    if not user_service.get_active_user(db, assigned_to_id):
        raise ValueError("Assigned user not found")
    return Lead(
        name=data.name,
        email=data.email,
        mobile=data.mobile,
        city=data.city,
        company=data.company,
        status=data.status,
        notes=data.notes,
        assigned_to_id=assigned_to_id,
        created_by_id=creator_id,
    )


def create_lead(db: Session, data: LeadCreate, creator_id: uuid.UUID) -> Lead:
    """Create a lead. Without an explicit assignee it is assigned to its creator."""
    lead = _new_lead(db, data, creator_id)
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead


def bulk_create_leads(
    db: Session, rows: list[LeadCreate], creator_id: uuid.UUID
) -> dict[str, Any]:
    """Import leads in one transaction, skipping the rows that cannot be stored.

    A row is skipped when its email already belongs to a lead, including one
    earlier in the same batch, or when its assignee does not exist.
    """
    seen_emails: set[str] = set()
    errors = []
    inserted = 0
    for index, row in enumerate(rows):
        if row.email and (
            row.email in seen_emails
            or db.query(Lead.id).filter(Lead.email == row.email).first()
        ):
            errors.append({"index": index, "error": f"Duplicate email {row.email}"})
            continue
        try:
            lead = _new_lead(db, row, creator_id)
        except ValueError as e:
            errors.append({"index": index, "error": str(e)})
            continue
        db.add(lead)
        if row.email:
            seen_emails.add(row.email)
        inserted += 1
    db.commit()
    logger.info(f"Imported {inserted} leads, skipped {len(errors)}")
    return {"inserted_count": inserted, "errors": errors}


def update_lead(db: Session, lead: Lead, data: LeadUpdate) -> Lead:
    """Update an existing lead."""
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(lead, field, value)
    db.commit()
    db.refresh(lead)
    return lead


def assign_lead(db: Session, lead: Lead, user_id: uuid.UUID | None) -> Lead:
    """Assign a lead to a user, or unassign it with None."""
    if user_id is not None and not user_service.get_active_user(db, user_id):
        raise ValueError("Assigned user not found")
    lead.assigned_to_id = user_id
    db.commit()
    db.refresh(lead)
    return lead


def delete_lead(db: Session, lead: Lead) -> None:
    """Delete a lead together with its communications."""
    db.delete(lead)
    db.commit()


def delete_all_leads(db: Session) -> int:
    """Delete every lead with its communications and follow-ups.

    Returns the number of leads removed.
    """
    for model in (Communication, FollowUp):
        db.query(model).filter(model.lead_id.is_not(None)).delete(
            synchronize_session=False
        )
    count = db.query(Lead).delete(synchronize_session=False)
    db.commit()
    logger.warning(f"Deleted all leads ({count})")
    return count
