"""Initial schema – principals, vaults, access grants, sequence, audit log

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Heights (created_at, modified_at, granted_at, expires_at) are chain-clock
integers, not timestamps.
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -- principals -----------------------------------------------------
    op.create_table(
        "principals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    # -- vaults ---------------------------------------------------------
    # id is allocated by registry_sequence, not AUTO_INCREMENT
    op.create_table(
        "vaults",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("title", sa.String(50), nullable=False),
        sa.Column("originator", sa.String(128), nullable=False),
        sa.Column("fingerprint", sa.String(64), nullable=False),
        sa.Column("summary", sa.String(200), nullable=False),
        sa.Column("classification", sa.String(20), nullable=False),
        sa.Column("labels", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.Column("modified_at", sa.Integer(), nullable=False),
    )
    op.create_index("idx_vaults_originator", "vaults", ["originator"])

    # -- access_grants --------------------------------------------------
    op.create_table(
        "access_grants",
        sa.Column(
            "vault_id",
            sa.Integer(),
            sa.ForeignKey("vaults.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("grantee", sa.String(128), primary_key=True),
        sa.Column("tier", sa.String(16), nullable=False),
        sa.Column("granted_at", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.Integer(), nullable=False),
        sa.Column("can_modify", sa.Boolean(), nullable=False, server_default=sa.text("0")),
    )

    # -- registry_sequence ----------------------------------------------
    # Seeded with its single row so registrations always have a row to lock.
    sequence = op.create_table(
        "registry_sequence",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("last_vault_id", sa.Integer(), nullable=False, server_default="0"),
    )
    op.bulk_insert(sequence, [{"id": 1, "last_vault_id": 0}])

    # -- audit_logs -----------------------------------------------------
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("actor", sa.String(128), nullable=False),
        sa.Column("vault_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.Column("request_ip", sa.String(45), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_audit_logs_actor", "audit_logs", ["actor"])
    op.create_index("idx_audit_logs_vault_id", "audit_logs", ["vault_id"])
    op.create_index("idx_audit_logs_action", "audit_logs", ["action"])


def downgrade() -> None:
    op.drop_index("idx_audit_logs_action", table_name="audit_logs")
    op.drop_index("idx_audit_logs_vault_id", table_name="audit_logs")
    op.drop_index("idx_audit_logs_actor", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("registry_sequence")
    op.drop_table("access_grants")
    op.drop_index("idx_vaults_originator", table_name="vaults")
    op.drop_table("vaults")
    op.drop_table("principals")
