# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Customer schemas."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from salescrm.models.enums import CustomerStatus, RenewalStatus


class CustomerBase(BaseModel):
    """Base customer schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    mobile: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    start_date: datetime.date | None = None
    notes: str | None = None


class CustomerCreate(CustomerBase):
    """Schema for creating a customer. Unassigned customers go to their creator."""

    status: CustomerStatus = CustomerStatus.EMAIL_SENT
    assigned_to_id: uuid.UUID | None = None


class CustomerUpdate(BaseModel):
    """Schema for updating a customer."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    mobile: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    status: CustomerStatus | None = None
    start_date: datetime.date | None = None
    notes: str | None = None


class RenewalUpdate(BaseModel):
    """Schema for recording a renewal."""

    renewal_date: datetime.date
    renewal_amount: Decimal | None = Field(None, ge=0)
    renewal_status: RenewalStatus = RenewalStatus.PENDING
    renewal_notes: str | None = None


class CustomerResponse(CustomerBase):
    """Schema for customer response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    status: CustomerStatus
    renewal_date: datetime.date | None = None
    renewal_amount: Decimal | None = None
    renewal_status: RenewalStatus | None = None
    renewal_notes: str | None = None
    assigned_to_id: uuid.UUID | None
    created_by_id: uuid.UUID | None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class CustomerBulkCreate(BaseModel):
    """Schema for importing many customers at once."""

    rows: list[CustomerCreate] = Field(..., min_length=1, max_length=1000)
