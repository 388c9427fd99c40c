# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Follow-up schemas."""

import datetime
import uuid
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FollowUpCreate(BaseModel):
    """Schema for scheduling a follow-up on a lead or a customer."""

    notes: str = Field(..., min_length=1)
    next_call_at: datetime.datetime
    lead_id: uuid.UUID | None = None
    customer_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def validate_single_contact(self) -> Self:
        """Ensure exactly one of lead_id / customer_id is set."""
        if (self.lead_id is None) == (self.customer_id is None):
            raise ValueError("Exactly one of lead_id or customer_id must be set")
        return self


class FollowUpUpdate(BaseModel):
    """Schema for rescheduling or completing a follow-up."""

    notes: str | None = Field(None, min_length=1)
    next_call_at: datetime.datetime | None = None
    is_completed: bool | None = None


class FollowUpResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    notes: str
    next_call_at: datetime.datetime
    is_completed: bool
    lead_id: uuid.UUID | None
    customer_id: uuid.UUID | None
    created_by_id: uuid.UUID | None
    created_at: datetime.datetime
    updated_at: datetime.datetime
