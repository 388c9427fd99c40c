# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Customer model."""

from __future__ import annotations

import uuid as uuid_lib
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salescrm.models.base import Base, TimestampMixin
from salescrm.models.enums import CustomerStatus, RenewalStatus

if TYPE_CHECKING:
    from salescrm.models.communication import Communication
    from salescrm.models.follow_up import FollowUp


class Customer(Base, TimestampMixin):
    """Converted customer with renewal tracking."""

    __tablename__ = "customers"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mobile: Mapped[str | None] = mapped_column(String(50), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[CustomerStatus] = mapped_column(
        Enum(CustomerStatus), default=CustomerStatus.EMAIL_SENT, nullable=False
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Renewal tracking
    renewal_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    renewal_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    renewal_status: Mapped[RenewalStatus | None] = mapped_column(
        Enum(RenewalStatus), nullable=True
    )
    renewal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    assigned_to_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    communications: Mapped[list[Communication]] = relationship(
        "Communication",
        back_populates="customer",
        cascade="all, delete-orphan",
    )
    follow_ups: Mapped[list[FollowUp]] = relationship(
        "FollowUp",
        back_populates="customer",
        cascade="all, delete-orphan",
    )
