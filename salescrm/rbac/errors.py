# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Error taxonomy of the access core.

None of these reach a request handler as an unhandled exception: the resolver
and the hierarchy directory log them and fail closed, and the employee
creation path turns ``QuotaRaceError`` into a "limit reached" denial.
"""

import uuid
from typing import Any


class AccessCoreError(Exception):
    """Base class for access core errors."""


class ScopeConfigurationError(AccessCoreError):
    """An identity carries a stored permission the resolver cannot honour."""

    def __init__(self, identity_id: uuid.UUID, key: str, value: Any, problem: str):
        self.identity_id = identity_id
        self.key = key
        self.value = value
        super().__init__(
            f"Invalid permission {key}={value!r} for user {identity_id}: {problem}"
        )


class HierarchyInconsistencyError(AccessCoreError):
    """A hierarchy edge references a missing or wrongly typed user."""

    def __init__(self, employee_id: uuid.UUID, admin_id: uuid.UUID, problem: str):
        self.employee_id = employee_id
        self.admin_id = admin_id
        super().__init__(
            f"Ignoring hierarchy edge {employee_id} -> {admin_id}: {problem}"
        )


class QuotaRaceError(AccessCoreError):
    """The employee creation limit was reached inside the creating transaction."""

    def __init__(self, admin_id: uuid.UUID, limit: int):
        self.admin_id = admin_id
        self.limit = limit
        super().__init__(f"Employee creation limit ({limit}) reached for admin {admin_id}")
