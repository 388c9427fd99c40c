# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Communication schemas."""

import datetime
import uuid
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from salescrm.models.enums import CommunicationType


class CommunicationCreate(BaseModel):
    """Schema for logging a communication against a lead or a customer."""

    type: CommunicationType
    notes: str | None = None
    subject: str | None = Field(None, max_length=500)
    duration: int | None = Field(None, ge=0)
    occurred_at: datetime.datetime | None = None
    lead_id: uuid.UUID | None = None
    customer_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def validate_single_contact(self) -> Self:
        """Ensure exactly one of lead_id / customer_id is set."""
        if (self.lead_id is None) == (self.customer_id is None):
            raise ValueError("Exactly one of lead_id or customer_id must be set")
        return self


class CommunicationResponse(BaseModel):
    """Schema for communication response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    type: CommunicationType
    notes: str | None
    subject: str | None
    duration: int | None
    occurred_at: datetime.datetime
    lead_id: uuid.UUID | None
    customer_id: uuid.UUID | None
    created_by_id: uuid.UUID | None
    created_at: datetime.datetime
