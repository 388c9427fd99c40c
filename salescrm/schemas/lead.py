# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Lead schemas."""

import datetime
import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from salescrm.models.enums import LeadStatus


class LeadBase(BaseModel):
    """Base lead schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    mobile: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    company: str | None = Field(None, max_length=255)
    notes: str | None = None


class LeadCreate(LeadBase):
    """Schema for creating a lead. Unassigned leads go to their creator."""

    status: LeadStatus = LeadStatus.NEW
    assigned_to_id: uuid.UUID | None = None


class LeadUpdate(BaseModel):
    """Schema for updating a lead. Assignment has its own endpoint."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    mobile: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    company: str | None = Field(None, max_length=255)
    status: LeadStatus | None = None
    notes: str | None = None


class LeadResponse(LeadBase):
    """Schema for lead response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    status: LeadStatus
    assigned_to_id: uuid.UUID | None
    created_by_id: uuid.UUID | None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class LeadBulkCreate(BaseModel):
    """Schema for importing many leads at once."""

    rows: list[LeadCreate] = Field(..., min_length=1, max_length=1000)
