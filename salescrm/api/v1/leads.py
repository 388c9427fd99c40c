# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Lead API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from salescrm.api.deps import ensure_allowed, get_db, get_identity, require_capability
from salescrm.models import Action, Lead, LeadStatus, ResourceType
from salescrm.rbac.identity import Identity
from salescrm.rbac.resolver import can_act, has_capability
from salescrm.schemas.common import AssignmentRequest, BulkImportResult, DeletedCount
from salescrm.schemas.lead import (
    LeadBulkCreate,
    LeadCreate,
    LeadResponse,
    LeadUpdate,
)
from salescrm.services import lead_service
from salescrm.services.access_service import fact_for_lead

router = APIRouter()


def get_lead_for_action(
    db: Session, identity: Identity, lead_id: uuid.UUID, action: Action
) -> Lead:
    """Load a lead and check the identity may act on it."""
    lead = lead_service.get_lead(db, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    ensure_allowed(can_act(identity, ResourceType.LEAD, action, fact_for_lead(lead)))
    return lead


@router.get("", response_model=list[LeadResponse])
def list_leads(
    lead_status: LeadStatus | None = Query(None, alias="status"),
    assigned_to_id: uuid.UUID | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[Lead]:
    """List the leads visible to the current user."""
    return lead_service.get_leads(
        db, identity, status=lead_status, assigned_to_id=assigned_to_id, search=search
    )


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
def create_lead(
    data: LeadCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createLeads")),
) -> Lead:
    """Create a lead. Assigning it to someone else requires assignLeads."""
    if data.assigned_to_id and data.assigned_to_id != identity.id:
        ensure_allowed(has_capability(identity, "assignLeads"))
    try:
        return lead_service.create_lead(db, data, identity.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post("/bulk", response_model=BulkImportResult)
def bulk_create_leads(
    data: LeadBulkCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createLeads")),
) -> dict:
    """Import many leads. Rows that cannot be stored are reported back."""
    if any(row.assigned_to_id not in (None, identity.id) for row in data.rows):
        ensure_allowed(has_capability(identity, "assignLeads"))
    return lead_service.bulk_create_leads(db, data.rows, identity.id)


@router.delete("", response_model=DeletedCount)
def delete_all_leads(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("clearSystemData")),
) -> dict:
    """Delete every lead in the system. Requires clearSystemData."""
    return {"deleted_count": lead_service.delete_all_leads(db)}


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead(
    lead_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> Lead:
    """Get a lead by ID."""
    return get_lead_for_action(db, identity, lead_id, Action.VIEW)


@router.patch("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_id: uuid.UUID,
    data: LeadUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> Lead:
    """Update a lead."""
    lead = get_lead_for_action(db, identity, lead_id, Action.EDIT)
    return lead_service.update_lead(db, lead, data)


@router.put("/{lead_id}/assign", response_model=LeadResponse)
def assign_lead(
    lead_id: uuid.UUID,
    data: AssignmentRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("assignLeads")),
) -> Lead:
    """Assign a lead to a user."""
    lead = get_lead_for_action(db, identity, lead_id, Action.EDIT)
    try:
        return lead_service.assign_lead(db, lead, data.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lead(
    lead_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> None:
    """Delete a lead."""
    lead = get_lead_for_action(db, identity, lead_id, Action.DELETE)
    lead_service.delete_lead(db, lead)
