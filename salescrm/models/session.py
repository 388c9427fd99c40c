# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Login sessions behind the session cookie."""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salescrm.config import settings
from salescrm.models.base import Base

if TYPE_CHECKING:
    from salescrm.models.user import User


def session_expiry() -> datetime:
    """Expiry of a session opened now."""
    return datetime.utcnow() + timedelta(days=settings.session_expiry_days)


class AuthSession(Base):
    """An opaque token that resolves to a user until it expires.

    Identity is looked up from the token on every request, so the token is
    indexed. Deleting the user removes their sessions.
    """

    __tablename__ = "sessions"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid_lib.uuid4
    )
    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        index=True,
        nullable=False,
        default=lambda: str(uuid_lib.uuid4()),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime, default=session_expiry, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    user: Mapped[User] = relationship("User", back_populates="sessions")

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at < (now or datetime.utcnow())
