# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Scope-based access control for leads, customers, communications and users."""

from salescrm.rbac.errors import (
    HierarchyInconsistencyError,
    QuotaRaceError,
    ScopeConfigurationError,
)
from salescrm.rbac.hierarchy import HierarchyDirectory
from salescrm.rbac.identity import (
    Decision,
    DenyReason,
    FactField,
    Identity,
    OwnershipFact,
)
from salescrm.rbac.predicates import Predicate, build_filter
from salescrm.rbac.quota import can_create_employee, reserve_employee_slot
from salescrm.rbac.resolver import can_act, has_capability

__all__ = [
    "Decision",
    "DenyReason",
    "FactField",
    "HierarchyDirectory",
    "HierarchyInconsistencyError",
    "Identity",
    "OwnershipFact",
    "Predicate",
    "QuotaRaceError",
    "ScopeConfigurationError",
    "build_filter",
    "can_act",
    "can_create_employee",
    "has_capability",
    "reserve_employee_slot",
]
