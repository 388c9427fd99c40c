# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Session lookup for the identity provider.

Credentials are verified upstream; this module only issues, resolves and
expires the opaque session tokens the API reads from its cookie.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy.orm import Session

from salescrm.models import AuthSession, User

logger = logging.getLogger(__name__)


def create_session(db: Session, user_id: uuid.UUID) -> str:
    """Create a new session for a user."""
    session = AuthSession(user_id=user_id)
    db.add(session)
    db.commit()
    return session.token


def get_session(db: Session, token: str) -> AuthSession | None:
    """Get a valid session by token."""
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return None
    if session.is_expired():
        db.delete(session)
        db.commit()
        return None
    return session


def delete_session(db: Session, token: str) -> bool:
    """Delete a session by token."""
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if session:
        db.delete(session)
        db.commit()
        return True
    return False


def get_user_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def cleanup_expired_sessions(db: Session) -> int:
    """Delete all expired sessions. Returns count of deleted sessions."""
    count = (
        db.query(AuthSession)
        .filter(AuthSession.expires_at < datetime.utcnow())
        .delete()
    )
    db.commit()
    if count:
        logger.info(f"Removed {count} expired sessions")
    return count
