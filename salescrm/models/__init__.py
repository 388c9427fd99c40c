# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from salescrm.models.base import Base, TimestampMixin
from salescrm.models.communication import Communication
from salescrm.models.customer import Customer
from salescrm.models.enums import (
    Action,
    CommunicationType,
    CustomerStatus,
    LeadStatus,
    RenewalStatus,
    ResourceType,
    Scope,
    UserRole,
)
from salescrm.models.follow_up import FollowUp
from salescrm.models.lead import Lead
from salescrm.models.session import AuthSession
from salescrm.models.user import User

__all__ = [
    "Action",
    "AuthSession",
    "Base",
    "Communication",
    "CommunicationType",
    "Customer",
    "CustomerStatus",
    "FollowUp",
    "Lead",
    "LeadStatus",
    "RenewalStatus",
    "ResourceType",
    "Scope",
    "TimestampMixin",
    "User",
    "UserRole",
]
