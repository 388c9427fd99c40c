# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User management API endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from salescrm.api.deps import ensure_allowed, get_db, get_identity, require_capability
from salescrm.models import Action, ResourceType, User, UserRole
from salescrm.rbac.errors import QuotaRaceError
from salescrm.rbac.identity import DenyReason, Identity
from salescrm.rbac.quota import can_create_employee
from salescrm.rbac.resolver import can_act
from salescrm.schemas.user import (
    AdminCreate,
    EmployeeCreate,
    PermissionsUpdate,
    QuotaResponse,
    UserResponse,
)
from salescrm.services import user_service
from salescrm.services.access_service import fact_for_user

router = APIRouter()


def get_user_for_action(
    db: Session, identity: Identity, user_id: uuid.UUID, action: Action
) -> User:
    """Load a user and check the identity may act on them."""
    user = user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    ensure_allowed(can_act(identity, ResourceType.USER, action, fact_for_user(user)))
    return user


@router.get("", response_model=list[UserResponse], summary="List users")
def list_users(
    role: UserRole | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> list[User]:
    """List the users visible to the current user.

    Without viewUsers access this is just the caller's own record.
    """
    return user_service.get_users(db, identity, role=role)


@router.post(
    "/admins",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin",
)
def create_admin(
    data: AdminCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createAdmin")),
) -> User:
    """Create an admin account. Requires createAdmin."""
    try:
        return user_service.create_admin(db, data, identity.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post(
    "/employees",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("createEmployee")),
) -> User:
    """Create an employee account. Requires createEmployee.

    Admins always create employees for themselves and are bound by their
    employee creation limit. Developers may pick an admin, or none.
    """
    if identity.role == UserRole.ADMIN:
        admin_id = identity.id
    elif identity.role == UserRole.DEVELOPER:
        admin_id = data.admin_id
    else:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins and developers can create employees",
        )

    if admin_id is not None:
        decision = can_create_employee(db, admin_id)
        if decision.reason is DenyReason.NOT_AN_ADMIN:
            raise HTTPException(status_code=400, detail="Assigned admin not found")
        ensure_allowed(decision)

    try:
        return user_service.create_employee(db, data, identity.id, admin_id)
    except QuotaRaceError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission denied: {DenyReason.LIMIT_REACHED.value}",
        ) from None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> User:
    """Get a user by ID. Everyone may view their own record."""
    return get_user_for_action(db, identity, user_id, Action.VIEW)


@router.get("/{user_id}/quota", response_model=QuotaResponse, summary="Employee quota")
def get_quota(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> dict:
    """Get the employee quota of an admin."""
    admin = get_user_for_action(db, identity, user_id, Action.VIEW)
    if admin.role != UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="User is not an admin")
    return user_service.get_quota(db, admin)


@router.put(
    "/{user_id}/permissions",
    response_model=UserResponse,
    summary="Replace stored permissions",
)
def update_permissions(
    user_id: uuid.UUID,
    data: PermissionsUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability("editUserPermissions")),
) -> User:
    """Replace a user's stored permissions.

    Requires editUserPermissions and edit access to the target user. Only
    permissions the caller holds can be granted.
    """
    user = get_user_for_action(db, identity, user_id, Action.EDIT)
    try:
        return user_service.update_permissions(
            db, user, data.permissions, grantor=identity
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user"
)
def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> None:
    """Delete a user. Nobody can delete themselves."""
    if user_id == identity.id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    user = get_user_for_action(db, identity, user_id, Action.DELETE)
    user_service.delete_user(db, user)
