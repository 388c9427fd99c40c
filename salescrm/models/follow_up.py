# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Follow-up model."""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salescrm.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from salescrm.models.customer import Customer
    from salescrm.models.lead import Lead


class FollowUp(Base, TimestampMixin):
    """A call scheduled against a lead or a customer.

    Like a communication it hangs off exactly one contact, and its
    ``created_by_id`` is whoever scheduled it.
    """

    __tablename__ = "follow_ups"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False)
    next_call_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    lead_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("leads.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    customer_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_by_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "(lead_id IS NULL) <> (customer_id IS NULL)",
            name="ck_follow_ups_single_contact",
        ),
    )

    lead: Mapped[Lead | None] = relationship("Lead", back_populates="follow_ups")
    customer: Mapped[Customer | None] = relationship(
        "Customer", back_populates="follow_ups"
    )
