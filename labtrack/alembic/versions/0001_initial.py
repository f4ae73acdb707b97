"""Initial database schema: accounts, settings, clients, analyses, custom benchmarks.

Also installs the row-level-security policies and the trigger that gives
every new account a settings row.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

OWNED_TABLES = ("settings", "clients", "analyses", "custom_benchmarks")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, index=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120)),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "settings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True),
        # Fernet token, see EncryptedText
        sa.Column("api_key", sa.Text),
        sa.Column("preferences", postgresql.JSONB),
        *_timestamps(),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("full_name", sa.String(length=255), nullable=False, index=True),
        sa.Column("email", sa.String(length=255)),
        sa.Column("date_of_birth", sa.Date),
        sa.Column("gender", sa.String(length=16)),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active", index=True),
        sa.Column("notes", sa.Text),
        sa.Column("tags", postgresql.JSONB),
        *_timestamps(),
        sa.CheckConstraint("gender IN ('male', 'female', 'other')", name="ck_clients_gender"),
        sa.CheckConstraint("status IN ('active', 'past')", name="ck_clients_status"),
    )

    op.create_table(
        "analyses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("client_id", sa.String(length=36), sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("lab_test_date", sa.Date, index=True),
        sa.Column("analysis_date", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False, index=True),
        # EncryptedJSON columns are TEXT
        sa.Column("results", sa.Text),
        sa.Column("summary", postgresql.JSONB),
        sa.Column("panel_name", sa.String(length=255)),
        sa.Column("notes", sa.Text),
        sa.Column("pdf_files", postgresql.JSONB),
        *_timestamps(),
    )

    op.create_table(
        "custom_benchmarks",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(length=255), nullable=False, index=True),
        sa.Column("male_range", sa.String(length=255)),
        sa.Column("female_range", sa.String(length=255)),
        sa.Column("units", postgresql.JSONB),
        sa.Column("category", sa.String(length=120)),
        sa.Column("aliases", postgresql.JSONB),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "name", name="uq_custom_benchmarks_user_name"),
    )

    # Row-level security: bind_row_owner sets app.current_user_id per transaction
    for table in OWNED_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY;")
        op.execute(
            f"""
            CREATE POLICY {table}_owner ON {table}
            USING (user_id = current_setting('app.current_user_id', true))
            WITH CHECK (user_id = current_setting('app.current_user_id', true));
            """
        )

    op.execute(
        """
        CREATE OR REPLACE FUNCTION on_user_created() RETURNS trigger AS $$
        BEGIN
            PERFORM set_config('app.current_user_id', NEW.id, true);
            INSERT INTO settings (id, user_id, preferences)
            VALUES (gen_random_uuid()::text, NEW.id, '{}'::jsonb)
            ON CONFLICT (user_id) DO NOTHING;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql SECURITY DEFINER;
        """
    )
    op.execute(
        """
        CREATE TRIGGER on_user_created
        AFTER INSERT ON users
        FOR EACH ROW EXECUTE FUNCTION on_user_created();
        """
    )


def downgrade():
    op.execute("DROP TRIGGER IF EXISTS on_user_created ON users;")
    op.execute("DROP FUNCTION IF EXISTS on_user_created();")
    for table in OWNED_TABLES:
        op.execute(f"DROP POLICY IF EXISTS {table}_owner ON {table};")
    op.drop_table("custom_benchmarks")
    op.drop_table("analyses")
    op.drop_table("clients")
    op.drop_table("settings")
    op.drop_table("users")
