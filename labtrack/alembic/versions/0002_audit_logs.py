"""Audit trail of account activity and data changes.

Entries can be read and inserted by their owner only; there are no update or
delete policies, so rows are immutable for the application role.

Revision ID: 0002_audit_logs
Revises: 0001_initial
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0002_audit_logs"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), index=True),
        sa.Column("user_email", sa.String(length=255)),
        sa.Column("action", sa.String(length=64), nullable=False, index=True),
        sa.Column("resource_type", sa.String(length=32)),
        sa.Column("resource_id", sa.String(length=36)),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="success"),
        sa.Column("error_message", sa.Text),
        sa.Column("metadata", postgresql.JSONB, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False, index=True),
        sa.CheckConstraint("status IN ('success', 'failure', 'error')", name="ck_audit_logs_status"),
        sa.CheckConstraint("char_length(action) > 0", name="ck_audit_logs_action"),
    )
    op.create_index("ix_audit_logs_resource", "audit_logs", ["resource_type", "resource_id"])

    op.execute("ALTER TABLE audit_logs ENABLE ROW LEVEL SECURITY;")
    op.execute("ALTER TABLE audit_logs FORCE ROW LEVEL SECURITY;")
    op.execute(
        """
        CREATE POLICY audit_logs_select_own ON audit_logs FOR SELECT
        USING (user_id = current_setting('app.current_user_id', true));
        """
    )
    # failed logins for unknown emails are stored without an owner
    op.execute(
        """
        CREATE POLICY audit_logs_insert_own ON audit_logs FOR INSERT
        WITH CHECK (user_id IS NULL OR user_id = current_setting('app.current_user_id', true));
        """
    )


def downgrade():
    op.execute("DROP POLICY IF EXISTS audit_logs_insert_own ON audit_logs;")
    op.execute("DROP POLICY IF EXISTS audit_logs_select_own ON audit_logs;")
    op.drop_index("ix_audit_logs_resource", table_name="audit_logs")
    op.drop_table("audit_logs")
