# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User schemas."""

import datetime
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from salescrm.models.enums import UserRole


class UserBase(BaseModel):
    """Base user schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    position: str | None = Field(None, max_length=255)


class EmployeeCreate(UserBase):
    """Schema for creating an employee.

    ``admin_id`` is only honoured when a developer creates the employee; an
    admin always creates employees for themselves.
    """

    admin_id: uuid.UUID | None = None


class AdminCreate(UserBase):
    """Schema for creating an admin."""

    employee_creation_limit: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, max_length=500)


class PermissionsUpdate(BaseModel):
    """Schema for replacing a user's stored permissions."""

    permissions: dict[str, Any]


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    position: str | None = None
    is_active: bool
    permissions: dict[str, Any]
    created_by_id: uuid.UUID | None = None
    created_by_admin_id: uuid.UUID | None = None
    employee_creation_limit: int | None = None
    logo_url: str | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class QuotaResponse(BaseModel):
    """Employee quota of an admin."""

    admin_id: uuid.UUID
    limit: int | None
    current_count: int
    can_create: bool
