# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Per-admin cap on the number of employee accounts."""

import logging
import uuid

from sqlalchemy import update
from sqlalchemy.orm import Session

from salescrm.models import User, UserRole
from salescrm.rbac.errors import QuotaRaceError
from salescrm.rbac.hierarchy import HierarchyDirectory
from salescrm.rbac.identity import Decision, DenyReason

logger = logging.getLogger(__name__)


def can_create_employee(db: Session, admin_id: uuid.UUID) -> Decision:
    """Check whether one more employee may be created for an admin.

    Read-only: calling it repeatedly never changes the answer. The creating
    transaction must still call ``reserve_employee_slot`` before inserting.
    """
    admin = db.query(User).filter(User.id == admin_id).one_or_none()
    if admin is None or admin.role != UserRole.ADMIN:
        return Decision.deny(DenyReason.NOT_AN_ADMIN)

    limit = admin.employee_creation_limit
    if limit is None:
        return Decision.allow()

    count = HierarchyDirectory(db).count_employees_of(admin_id)
    if count >= limit:
        logger.info(f"Admin {admin_id} reached employee limit ({count}/{limit})")
        return Decision.deny(DenyReason.LIMIT_REACHED)
    return Decision.allow()


def reserve_employee_slot(db: Session, admin_id: uuid.UUID) -> User:
    """Lock the admin row and re-check the limit inside the current transaction.

    The row lock serializes concurrent creations for the same admin until the
    caller commits or rolls back. Raises QuotaRaceError when the limit has been
    reached and ValueError when the admin no longer exists. Returns the locked
    admin row.
    """
    if db.get_bind().dialect.name == "sqlite":
        # SQLite ignores FOR UPDATE; take the write lock before counting
        db.execute(
            update(User)
            .where(User.id == admin_id)
            .values(
                employee_creation_limit=User.employee_creation_limit,
                updated_at=User.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

    admin = (
        db.query(User)
        .filter(User.id == admin_id)
        .with_for_update()
        .one_or_none()
    )
    if admin is None or admin.role != UserRole.ADMIN:
        raise ValueError(f"Admin {admin_id} not found")

    limit = admin.employee_creation_limit
    if limit is not None and HierarchyDirectory(db).count_employees_of(admin_id) >= limit:
        raise QuotaRaceError(admin_id, limit)
    return admin
