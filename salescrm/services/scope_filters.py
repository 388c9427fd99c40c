# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Translate access predicates into SQLAlchemy filter clauses."""

from collections.abc import Mapping

import sqlalchemy as sa
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from salescrm.models import (
    Communication,
    Customer,
    FollowUp,
    Lead,
    ResourceType,
    User,
)
from salescrm.rbac.identity import FactField
from salescrm.rbac.predicates import AnyOf, Equals, MatchAll, MatchNone, OneOf, Predicate


def to_clause(
    predicate: Predicate, columns: Mapping[FactField, ColumnElement]
) -> ColumnElement[bool]:
    """Render a predicate against the given fact columns.

    The rendered clause never negates, so NULL columns simply fail to match,
    the same as in ``Predicate.matches``.
    """
    if isinstance(predicate, MatchAll):
        return sa.true()
    if isinstance(predicate, MatchNone):
        return sa.false()
    if isinstance(predicate, Equals):
        return columns[predicate.field] == predicate.value
    if isinstance(predicate, OneOf):
        if not predicate.values:
            return sa.false()
        return columns[predicate.field].in_(sorted(predicate.values, key=str))
    if isinstance(predicate, AnyOf):
        if not predicate.terms:
            return sa.false()
        return sa.or_(*(to_clause(term, columns) for term in predicate.terms))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def apply_scope_filter(
    query: Query, resource_type: ResourceType, predicate: Predicate
) -> Query:
    """Restrict a listing query to the rows the predicate admits."""
    if isinstance(predicate, MatchAll):
        return query

    if resource_type is ResourceType.LEAD:
        columns = {
            FactField.CREATOR: Lead.created_by_id,
            FactField.ASSIGNEE: Lead.assigned_to_id,
        }
    elif resource_type is ResourceType.CUSTOMER:
        columns = {
            FactField.CREATOR: Customer.created_by_id,
            FactField.ASSIGNEE: Customer.assigned_to_id,
        }
    elif resource_type is ResourceType.USER:
        columns = {
            FactField.CREATOR: sa.func.coalesce(
                User.created_by_admin_id, User.created_by_id
            ),
            FactField.ASSIGNEE: User.id,
        }
    elif resource_type in (ResourceType.COMMUNICATION, ResourceType.FOLLOW_UP):
        model = (
            Communication if resource_type is ResourceType.COMMUNICATION else FollowUp
        )
        # Only one of the two joins matches, so COALESCE picks the linked contact
        query = query.outerjoin(Lead, model.lead_id == Lead.id).outerjoin(
            Customer, model.customer_id == Customer.id
        )
        columns = {
            FactField.CREATOR: model.created_by_id,
            FactField.CONTACT_CREATOR: sa.func.coalesce(
                Lead.created_by_id, Customer.created_by_id
            ),
            FactField.CONTACT_ASSIGNEE: sa.func.coalesce(
                Lead.assigned_to_id, Customer.assigned_to_id
            ),
        }
    else:
        raise ValueError(f"Unsupported resource type: {resource_type}")

    return query.filter(to_clause(predicate, columns))
