"""Initial schema: users, sessions, leads, customers, communications

Revision ID: 3f1c7a9d2e40
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c7a9d2e40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

USER_ROLE = sa.Enum("DEVELOPER", "ADMIN", "EMPLOYEE", name="userrole")
LEAD_STATUS = sa.Enum(
    "NEW",
    "NOT_CONNECTED",
    "FOLLOW_UP",
    "INTERESTED",
    "READY_TO_ATTEND",
    "CONSULTATION_DONE",
    "ATTENDED",
    name="leadstatus",
)
CUSTOMER_STATUS = sa.Enum(
    "EMAIL_SENT",
    "FORM_FILLED",
    "PAYMENT_MADE",
    "DOCUMENTS_SUBMITTED",
    "ACCOUNT_STARTED",
    "ACTIVE",
    "COMPLETED",
    name="customerstatus",
)
RENEWAL_STATUS = sa.Enum(
    "PENDING", "RENEWED", "EXPIRED", "CANCELLED", name="renewalstatus"
)
COMMUNICATION_TYPE = sa.Enum(
    "CALL", "EMAIL", "MEETING", "REMARK", "OTHER", name="communicationtype"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", USER_ROLE, nullable=False),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("created_by_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_admin_id", sa.Uuid(), nullable=True),
        sa.Column("employee_creation_limit", sa.Integer(), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["created_by_admin_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(
        op.f("ix_users_created_by_admin_id"),
        "users",
        ["created_by_admin_id"],
        unique=False,
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("token", sa.String(length=36), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sessions_token"), "sessions", ["token"], unique=True)
    op.create_index(
        op.f("ix_sessions_user_id"), "sessions", ["user_id"], unique=False
    )

    op.create_table(
        "leads",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("mobile", sa.String(length=50), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("status", LEAD_STATUS, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("assigned_to_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["assigned_to_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_leads_assigned_to_id"), "leads", ["assigned_to_id"])
    op.create_index(op.f("ix_leads_created_by_id"), "leads", ["created_by_id"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("mobile", sa.String(length=50), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("status", CUSTOMER_STATUS, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("renewal_date", sa.Date(), nullable=True),
        sa.Column("renewal_amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("renewal_status", RENEWAL_STATUS, nullable=True),
        sa.Column("renewal_notes", sa.Text(), nullable=True),
        sa.Column("assigned_to_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["assigned_to_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_customers_assigned_to_id"), "customers", ["assigned_to_id"]
    )
    op.create_index(op.f("ix_customers_created_by_id"), "customers", ["created_by_id"])

    op.create_table(
        "communications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("type", COMMUNICATION_TYPE, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("subject", sa.String(length=500), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("lead_id", sa.Uuid(), nullable=True),
        sa.Column("customer_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "(lead_id IS NULL) <> (customer_id IS NULL)",
            name="ck_communications_single_contact",
        ),
        sa.ForeignKeyConstraint(["lead_id"], ["leads.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_communications_lead_id"), "communications", ["lead_id"])
    op.create_index(
        op.f("ix_communications_customer_id"), "communications", ["customer_id"]
    )
    op.create_index(
        op.f("ix_communications_created_by_id"), "communications", ["created_by_id"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_communications_created_by_id"), table_name="communications")
    op.drop_index(op.f("ix_communications_customer_id"), table_name="communications")
    op.drop_index(op.f("ix_communications_lead_id"), table_name="communications")
    op.drop_table("communications")

    op.drop_index(op.f("ix_customers_created_by_id"), table_name="customers")
    op.drop_index(op.f("ix_customers_assigned_to_id"), table_name="customers")
    op.drop_table("customers")

    op.drop_index(op.f("ix_leads_created_by_id"), table_name="leads")
    op.drop_index(op.f("ix_leads_assigned_to_id"), table_name="leads")
    op.drop_table("leads")

    op.drop_index(op.f("ix_sessions_user_id"), table_name="sessions")
    op.drop_index(op.f("ix_sessions_token"), table_name="sessions")
    op.drop_table("sessions")

    op.drop_index(op.f("ix_users_created_by_admin_id"), table_name="users")
    op.drop_table("users")
