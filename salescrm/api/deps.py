# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

import uuid
from collections.abc import Callable, Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from salescrm.config import settings
from salescrm.database import SessionLocal
from salescrm.models import Action, ResourceType, User
from salescrm.rbac.identity import Decision, Identity
from salescrm.rbac.resolver import can_act, has_capability
from salescrm.services import (
    access_service,
    auth_service,
    customer_service,
    lead_service,
)


def get_db() -> Generator[Session]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user from the session cookie."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    session_obj = auth_service.get_session(db, token)
    if not session_obj:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
        )

    user = auth_service.get_user_by_id(db, session_obj.user_id)
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    return user


def get_identity(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Identity:
    """Get the access identity of the current user."""
    return access_service.load_identity(db, current_user)


def ensure_allowed(decision: Decision) -> None:
    """Turn a denial into a 403 response."""
    if not decision:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission denied: {decision.reason.value}",
        )


def require_capability(key: str) -> Callable[..., Identity]:
    """Dependency for capability-based authorization."""

    def dependency(identity: Identity = Depends(get_identity)) -> Identity:
        decision = has_capability(identity, key)
        if not decision:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: {key}",
            )
        return identity

    return dependency


def ensure_contact_visible(
    db: Session,
    identity: Identity,
    lead_id: uuid.UUID | None,
    customer_id: uuid.UUID | None,
) -> None:
    """Check the lead or customer a new record hangs off exists and is visible."""
    if lead_id is not None:
        lead = lead_service.get_lead(db, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        decision = can_act(
            identity, ResourceType.LEAD, Action.VIEW, access_service.fact_for_lead(lead)
        )
    else:
        customer = customer_service.get_customer(db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        decision = can_act(
            identity,
            ResourceType.CUSTOMER,
            Action.VIEW,
            access_service.fact_for_customer(customer),
        )
    ensure_allowed(decision)
