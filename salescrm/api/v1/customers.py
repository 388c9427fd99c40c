# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Customer API endpoints."""

import datetime
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from salescrm.api.deps import ensure_allowed, get_db, get_identity, require_capability
from salescrm.models import Action, Customer, CustomerStatus, ResourceType, UserRole
from salescrm.rbac.identity import Identity
from salescrm.rbac.resolver import can_act, has_capability
from salescrm.schemas.common import AssignmentRequest, BulkImportResult
from salescrm.schemas.customer import (
    CustomerBulkCreate,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    RenewalUpdate,
)
from salescrm.services import customer_service
from salescrm.services.access_service import fact_for_customer

router = APIRouter()


def get_customer_for_action(
    db: Session, identity: Identity, customer_id: uuid.UUID, action: Action
) -> Customer:
    """Load a customer and check the identity may act on it."""
    customer = customer_service.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    ensure_allowed(
        can_act(identity, ResourceType.CUSTOMER, action, fact_for_customer(customer))
    )
    return customer


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    customer_status: CustomerStatus | None = Query(None, alias="status"),
    renewal_before: datetime.date | None = None,
    search: str | None = None,
    admin_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[Customer]:
    """List the customers visible to the current user.

    Developers can narrow the listing to one admin's team with ``admin_id``.
    """
    if admin_id and identity.role != UserRole.DEVELOPER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only developers can filter by admin",
        )
    try:
        return customer_service.get_customers(
            db,
            identity,
            status=customer_status,
            renewal_before=renewal_before,
            search=search,
            admin_id=admin_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createCustomers")),
) -> Customer:
    """Create a customer. Assigning it to someone else requires assignCustomers."""
    if data.assigned_to_id and data.assigned_to_id != identity.id:
        ensure_allowed(has_capability(identity, "assignCustomers"))
    try:
        return customer_service.create_customer(db, data, identity.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post("/bulk", response_model=BulkImportResult)
def bulk_create_customers(
    data: CustomerBulkCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createCustomers")),
) -> dict:
    """Import many customers. Rows that cannot be stored are reported back."""
    if any(row.assigned_to_id not in (None, identity.id) for row in data.rows):
        ensure_allowed(has_capability(identity, "assignCustomers"))
    return customer_service.bulk_create_customers(db, data.rows, identity.id)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> Customer:
    """Get a customer by ID."""
    return get_customer_for_action(db, identity, customer_id, Action.VIEW)


@router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: uuid.UUID,
    data: CustomerUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> Customer:
    """Update a customer."""
    customer = get_customer_for_action(db, identity, customer_id, Action.EDIT)
    return customer_service.update_customer(db, customer, data)


@router.put("/{customer_id}/renewal", response_model=CustomerResponse)
def update_renewal(
    customer_id: uuid.UUID,
    data: RenewalUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("manageRenewals")),
) -> Customer:
    """Record the next renewal of a customer."""
    customer = get_customer_for_action(db, identity, customer_id, Action.EDIT)
    return customer_service.update_renewal(db, customer, data)


@router.put("/{customer_id}/assign", response_model=CustomerResponse)
def assign_customer(
    customer_id: uuid.UUID,
    data: AssignmentRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("assignCustomers")),
) -> Customer:
    """Assign a customer to a user."""
    customer = get_customer_for_action(db, identity, customer_id, Action.EDIT)
    try:
        return customer_service.assign_customer(db, customer, data.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> None:
    """Delete a customer."""
    customer = get_customer_for_action(db, identity, customer_id, Action.DELETE)
    customer_service.delete_customer(db, customer)
