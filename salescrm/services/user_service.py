# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User account service."""

import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session

from salescrm.models import (
    Action,
    Communication,
    Customer,
    FollowUp,
    Lead,
    ResourceType,
    Scope,
    User,
    UserRole,
)
from salescrm.rbac.errors import QuotaRaceError, ScopeConfigurationError
from salescrm.rbac.hierarchy import HierarchyDirectory
from salescrm.rbac.identity import Identity
from salescrm.rbac.permissions import CAPABILITY_KEYS, SCOPED_PERMISSION_KEYS
from salescrm.rbac.policy import (
    LEGACY_SCOPE_ALIASES,
    default_permissions,
    resolve_scope,
)
from salescrm.rbac.predicates import build_filter
from salescrm.rbac.quota import can_create_employee, reserve_employee_slot
from salescrm.rbac.resolver import has_capability
from salescrm.schemas.user import AdminCreate, EmployeeCreate
from salescrm.services.scope_filters import apply_scope_filter

logger = logging.getLogger(__name__)

SCOPED_KEYS = frozenset(SCOPED_PERMISSION_KEYS.values())
SCOPED_KEY_TARGETS = {key: target for target, key in SCOPED_PERMISSION_KEYS.items()}


def get_users(
    db: Session, identity: Identity, role: UserRole | None = None
) -> list[User]:
    """Get the users visible to an identity."""
    query = db.query(User)
    predicate = build_filter(identity, ResourceType.USER, Action.VIEW)
    query = apply_scope_filter(query, ResourceType.USER, predicate)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.name).all()


def get_user(db: Session, user_id: uuid.UUID) -> User | None:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_active_user(db: Session, user_id: uuid.UUID) -> User | None:
    """Get an active user by ID."""
    return (
        db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
    )


def _ensure_email_available(db: Session, email: str) -> None:
    if db.query(User).filter(User.email == email).first():
        raise ValueError("Email already in use")


def create_admin(db: Session, data: AdminCreate, creator_id: uuid.UUID) -> User:
    """Create an admin with the default admin permissions."""
    _ensure_email_available(db, data.email)
    admin = User(
        name=data.name,
        email=data.email,
        position=data.position,
        role=UserRole.ADMIN,
        permissions=default_permissions(UserRole.ADMIN),
        created_by_id=creator_id,
        employee_creation_limit=data.employee_creation_limit,
        logo_url=data.logo_url,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Created admin {admin.id} (limit {admin.employee_creation_limit})")
    return admin


def create_employee(
    db: Session,
    data: EmployeeCreate,
    creator_id: uuid.UUID,
    admin_id: uuid.UUID | None,
) -> User:
    """Create an employee, optionally under an admin.

    When an admin is given, the admin row is locked and the employee quota is
    re-checked in the same transaction as the insert. Raises QuotaRaceError
    when the limit was reached in the meantime.
    """
    _ensure_email_available(db, data.email)

    logo_url = None
    if admin_id is not None:
        try:
            admin = reserve_employee_slot(db, admin_id)
        except (QuotaRaceError, ValueError):
            db.rollback()
            raise
        logo_url = admin.logo_url
    else:
        logger.warning(f"Employee {data.email} created without an admin")

    employee = User(
        name=data.name,
        email=data.email,
        position=data.position,
        role=UserRole.EMPLOYEE,
        permissions=default_permissions(UserRole.EMPLOYEE),
        created_by_id=creator_id,
        created_by_admin_id=admin_id,
        logo_url=logo_url,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def _grantor_scope(grantor: Identity, key: str) -> Scope:
    resource_type, action = SCOPED_KEY_TARGETS[key]
    try:
        return resolve_scope(grantor, resource_type, action)
    except ScopeConfigurationError as e:
        logger.error(f"Treating {key} of grantor as none: {e}")
        return Scope.NONE


def validate_permissions(
    role: UserRole, permissions: dict[str, Any], grantor: Identity | None = None
) -> dict[str, Any]:
    """Validate stored permissions before they are written.

    Raises ValueError for unknown keys, values of the wrong type, and
    subordinates scope on anyone but an admin. When a grantor is given,
    nobody hands out more than they hold: a capability can only be enabled
    by someone who has it, and ``all`` scope only granted by someone whose
    own scope for that key is ``all``.
    """
    cleaned: dict[str, Any] = {}
    for key, value in permissions.items():
        if key in CAPABILITY_KEYS:
            if not isinstance(value, bool):
                raise ValueError(f"{key} must be true or false")
            if value and grantor is not None and not has_capability(grantor, key):
                raise ValueError(f"Cannot grant {key}: you do not have it")
            cleaned[key] = value
        elif key in SCOPED_KEYS:
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a scope")
            if value in LEGACY_SCOPE_ALIASES:
                value = LEGACY_SCOPE_ALIASES[value].value
            try:
                scope = Scope(value)
            except ValueError:
                raise ValueError(f"{key} has unknown scope {value!r}") from None
            if scope is Scope.SUBORDINATES and role != UserRole.ADMIN:
                raise ValueError(f"{key}: subordinates scope is only valid for admins")
            if (
                scope is Scope.ALL
                and grantor is not None
                and _grantor_scope(grantor, key) is not Scope.ALL
            ):
                raise ValueError(f"Cannot grant {key} on all records: you do not have it")
            cleaned[key] = scope.value
        else:
            raise ValueError(f"Unknown permission: {key}")
    return cleaned


def update_permissions(
    db: Session,
    user: User,
    permissions: dict[str, Any],
    grantor: Identity | None = None,
) -> User:
    """Replace a user's stored permissions."""
    user.permissions = validate_permissions(user.role, permissions, grantor)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete a user and detach everything that referenced them."""
    user_id = user.id
    for model in (Lead, Customer):
        db.query(model).filter(model.assigned_to_id == user_id).update(
            {model.assigned_to_id: None}
        )
        db.query(model).filter(model.created_by_id == user_id).update(
            {model.created_by_id: None}
        )
    for model in (Communication, FollowUp):
        db.query(model).filter(model.created_by_id == user_id).update(
            {model.created_by_id: None}
        )
    db.query(User).filter(User.created_by_admin_id == user_id).update(
        {User.created_by_admin_id: None}
    )
    db.query(User).filter(User.created_by_id == user_id).update(
        {User.created_by_id: None}
    )
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")


def get_quota(db: Session, admin: User) -> dict[str, Any]:
    """Get the employee quota of an admin."""
    return {
        "admin_id": admin.id,
        "limit": admin.employee_creation_limit,
        "current_count": HierarchyDirectory(db).count_employees_of(admin.id),
        "can_create": can_create_employee(db, admin.id).allowed,
    }
