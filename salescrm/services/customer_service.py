# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Customer service."""

import datetime
import logging
import uuid
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from salescrm.models import Action, Customer, CustomerStatus, ResourceType, UserRole
from salescrm.rbac.hierarchy import HierarchyDirectory
from salescrm.rbac.identity import Identity
from salescrm.rbac.predicates import build_filter, owned_by
from salescrm.schemas.customer import CustomerCreate, CustomerUpdate, RenewalUpdate
from salescrm.services import user_service
from salescrm.services.scope_filters import apply_scope_filter

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"name", "status"}


def get_customers(
    db: Session,
    identity: Identity,
    status: CustomerStatus | None = None,
    renewal_before: datetime.date | None = None,
    search: str | None = None,
    admin_id: uuid.UUID | None = None,
) -> list[Customer]:
    """Get the customers visible to an identity, with optional filters.

    ``renewal_before`` keeps customers whose renewal falls on or before the
    given date, which is how the renewals view is built. ``admin_id`` narrows
    the listing to one admin's team: customers created by or assigned to the
    admin or any of their employees. Raises ValueError when ``admin_id`` is
    not an admin.
    """
    query = db.query(Customer)
    predicate = build_filter(identity, ResourceType.CUSTOMER, Action.VIEW)
    query = apply_scope_filter(query, ResourceType.CUSTOMER, predicate)
    if admin_id:
        admin = user_service.get_user(db, admin_id)
        if admin is None or admin.role != UserRole.ADMIN:
            raise ValueError("Admin not found")
        team = HierarchyDirectory(db).subordinates_of(admin_id) | {admin_id}
        query = apply_scope_filter(
            query, ResourceType.CUSTOMER, owned_by(ResourceType.CUSTOMER, team)
        )
    if status:
        query = query.filter(Customer.status == status)
    if renewal_before:
        query = query.filter(
            Customer.renewal_date.is_not(None),
            Customer.renewal_date <= renewal_before,
        )
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.mobile.ilike(pattern),
            )
        )
    return query.order_by(Customer.created_at.desc()).all()


def get_customer(db: Session, customer_id: uuid.UUID) -> Customer | None:
    """Get a customer by ID."""
    return db.query(Customer).filter(Customer.id == customer_id).first()


def _new_customer(
    db: Session, data: CustomerCreate, creator_id: uuid.UUID
) -> Customer:
    assigned_to_id = data.assigned_to_id or creator_id
    if not user_service.get_active_user(db, assigned_to_id):
        raise ValueError("Assigned user not found")
    return Customer(
        name=data.name,
        email=data.email,
        mobile=data.mobile,
        city=data.city,
        status=data.status,
        start_date=data.start_date,
        notes=data.notes,
        assigned_to_id=assigned_to_id,
        created_by_id=creator_id,
    )


def create_customer(
    db: Session, data: CustomerCreate, creator_id: uuid.UUID
) -> Customer:
    """Create a customer. Without an explicit assignee it goes to its creator."""
    customer = _new_customer(db, data, creator_id)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def bulk_create_customers(
    db: Session, rows: list[CustomerCreate], creator_id: uuid.UUID
) -> dict[str, Any]:
    """Import customers in one transaction, skipping rows that cannot be stored."""
    seen_emails: set[str] = set()
    errors = []
    inserted = 0
    for index, row in enumerate(rows):
        if row.email and (
            row.email in seen_emails
            or db.query(Customer.id).filter(Customer.email == row.email).first()
        ):
            errors.append({"index": index, "error": f"Duplicate email {row.email}"})
            continue
        try:
            customer = _new_customer(db, row, creator_id)
        except ValueError as e:
            errors.append({"index": index, "error": str(e)})
            continue
        db.add(customer)
        if row.email:
            seen_emails.add(row.email)
        inserted += 1
    db.commit()
    logger.info(f"Imported {inserted} customers, skipped {len(errors)}")
    return {"inserted_count": inserted, "errors": errors}


def update_customer(db: Session, customer: Customer, data: CustomerUpdate) -> Customer:
    """Update an existing customer."""
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(customer, field, value)
    db.commit()
    db.refresh(customer)
    return customer


def update_renewal(db: Session, customer: Customer, data: RenewalUpdate) -> Customer:
    """Record the next renewal of a customer."""
    customer.renewal_date = data.renewal_date
    customer.renewal_amount = data.renewal_amount
    customer.renewal_status = data.renewal_status
    customer.renewal_notes = data.renewal_notes
    db.commit()
    db.refresh(customer)
    return customer


def assign_customer(
    db: Session, customer: Customer, user_id: uuid.UUID | None
) -> Customer:
    """Assign a customer to a user, or unassign it with None."""
    if user_id is not None and not user_service.get_active_user(db, user_id):
        raise ValueError("Assigned user not found")
    customer.assigned_to_id = user_id
    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer: Customer) -> None:
    """Delete a customer together with its communications."""
    db.delete(customer)
    db.commit()
