# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models and access rules."""

from enum import Enum


class UserRole(str, Enum):
    """Account role enumeration."""

    DEVELOPER = "developer"
    ADMIN = "admin"
    EMPLOYEE = "employee"


class Scope(str, Enum):
    """Which resources an identity may act on.

    Values are independent predicates, not ranks. SUBORDINATES only has a
    meaning for admins.
    """

    NONE = "none"
    CREATED = "created"
    ASSIGNED = "assigned"
    SUBORDINATES = "subordinates"
    ALL = "all"


class ResourceType(str, Enum):
    """Resource types that carry ownership facts."""

    LEAD = "lead"
    CUSTOMER = "customer"
    COMMUNICATION = "communication"
    FOLLOW_UP = "follow_up"
    USER = "user"


class Action(str, Enum):
    """Scoped actions on a single resource."""

    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"


class LeadStatus(str, Enum):
    """Lead pipeline status enumeration."""

    NEW = "new"
    NOT_CONNECTED = "not_connected"
    FOLLOW_UP = "follow_up"
    INTERESTED = "interested"
    READY_TO_ATTEND = "ready_to_attend"
    CONSULTATION_DONE = "consultation_done"
    ATTENDED = "attended"


class CustomerStatus(str, Enum):
    """Customer onboarding status enumeration."""

    EMAIL_SENT = "email_sent"
    FORM_FILLED = "form_filled"
    PAYMENT_MADE = "payment_made"
    DOCUMENTS_SUBMITTED = "documents_submitted"
    ACCOUNT_STARTED = "account_started"
    ACTIVE = "active"
    COMPLETED = "completed"


class RenewalStatus(str, Enum):
    """Renewal status enumeration."""

    PENDING = "pending"
    RENEWED = "renewed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class CommunicationType(str, Enum):
    """Communication record type enumeration."""

    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"
    REMARK = "remark"
    OTHER = "other"
