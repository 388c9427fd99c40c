# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin -> employee hierarchy, read straight from the users table."""

import logging
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from salescrm.models import User, UserRole
from salescrm.rbac.errors import HierarchyInconsistencyError

logger = logging.getLogger(__name__)


class HierarchyDirectory:
    """Read-through view of ``users.created_by_admin_id`` edges.

    Nothing is cached: the hierarchy can change between requests and every
    lookup reflects the current database state. Edges that point at a missing
    admin, or whose child is not an employee, are logged and ignored.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def subordinates_of(self, admin_id: uuid.UUID) -> frozenset[uuid.UUID]:
        """Return the ids of the employees that belong to an admin."""
        if not self._is_admin(admin_id):
            return frozenset()

        rows = (
            self.db.query(User.id, User.role)
            .filter(User.created_by_admin_id == admin_id)
            .all()
        )
        subordinates = set()
        for user_id, role in rows:
            if role != UserRole.EMPLOYEE:
                self._report(
                    HierarchyInconsistencyError(user_id, admin_id, f"child is a {role.value}")
                )
                continue
            subordinates.add(user_id)
        return frozenset(subordinates)

    def admin_of(self, employee_id: uuid.UUID) -> uuid.UUID | None:
        """Return the admin an employee belongs to, or None."""
        row = (
            self.db.query(User.role, User.created_by_admin_id)
            .filter(User.id == employee_id)
            .one_or_none()
        )
        if row is None or row.created_by_admin_id is None:
            return None
        if row.role != UserRole.EMPLOYEE:
            self._report(
                HierarchyInconsistencyError(
                    employee_id, row.created_by_admin_id, f"child is a {row.role.value}"
                )
            )
            return None
        if not self._is_admin(row.created_by_admin_id, child_id=employee_id):
            return None
        return row.created_by_admin_id

    def is_subordinate(self, admin_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Check whether a user is one of the admin's employees."""
        return self.admin_of(user_id) == admin_id

    def count_employees_of(self, admin_id: uuid.UUID) -> int:
        """Count the employees created for an admin."""
        return (
            self.db.query(func.count(User.id))
            .filter(
                User.created_by_admin_id == admin_id,
                User.role == UserRole.EMPLOYEE,
            )
            .scalar()
            or 0
        )

    def _is_admin(self, admin_id: uuid.UUID, child_id: uuid.UUID | None = None) -> bool:
        role = self.db.query(User.role).filter(User.id == admin_id).scalar()
        if role == UserRole.ADMIN:
            return True
        if child_id is not None:
            problem = "admin does not exist" if role is None else f"parent is a {role.value}"
            self._report(HierarchyInconsistencyError(child_id, admin_id, problem))
        return False

    @staticmethod
    def _report(error: HierarchyInconsistencyError) -> None:
        logger.warning(str(error))
