# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Session endpoints."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from salescrm.api.deps import get_current_user, get_db
from salescrm.config import settings
from salescrm.models import User
from salescrm.schemas.common import MessageResponse
from salescrm.schemas.user import UserResponse
from salescrm.services import auth_service

router = APIRouter()


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> dict:
    """End the current session."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        auth_service.delete_session(db, token)
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the currently authenticated user."""
    return current_user
