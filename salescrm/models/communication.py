# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Communication record model."""

from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salescrm.models.base import Base, TimestampMixin
from salescrm.models.enums import CommunicationType

if TYPE_CHECKING:
    from salescrm.models.customer import Customer
    from salescrm.models.lead import Lead


class Communication(Base, TimestampMixin):
    """A call, email, meeting or remark logged against a lead or a customer.

    Exactly one of ``lead_id`` / ``customer_id`` is set.
    """

    __tablename__ = "communications"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    type: Mapped[CommunicationType] = mapped_column(
        Enum(CommunicationType), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str | None] = mapped_column(String(500), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
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
            name="ck_communications_single_contact",
        ),
    )

    # Relationships
    lead: Mapped[Lead | None] = relationship("Lead", back_populates="communications")
    customer: Mapped[Customer | None] = relationship(
        "Customer", back_populates="communications"
    )
