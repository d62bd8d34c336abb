"""initial_schema

Create the foundational schema for ProTrack:
- Tenants (organizations, unique subdomain)
- Users (record per identity, optional tenant, JSONB permission map)
- User invitations (one pending invitation per tenant and email)

Revision ID: 3c1f2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.310257

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # TENANTS table
    # ========================================================================
    op.create_table(
        "tenants",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("subdomain", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("plan", sa.String(50), nullable=False, server_default="professional"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("subdomain", name="uq_tenants_subdomain"),
        sa.CheckConstraint(
            "status IN ('active', 'suspended', 'cancelled')",
            name="ck_tenants_status",
        ),
    )

    # ========================================================================
    # USERS table (id is the identity provider's user id)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="entry"),
        sa.Column("permissions", postgresql.JSONB(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "role IN ('master', 'entry', 'view')", name="ck_users_role"
        ),
    )
    op.create_index("idx_users_tenant_id", "users", ["tenant_id"])
    op.create_index("idx_users_tenant_email", "users", ["tenant_id", "email"])

    # ========================================================================
    # USER_INVITATIONS table
    # ========================================================================
    op.create_table(
        "user_invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("permissions", postgresql.JSONB(), nullable=False),
        sa.Column("invited_by", sa.UUID(), nullable=False),
        sa.Column("invitation_token", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invited_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_token", name="uq_user_invitations_token"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'expired')",
            name="ck_user_invitations_status",
        ),
    )
    op.create_index("idx_user_invitations_tenant_id", "user_invitations", ["tenant_id"])

    # Partial unique index: only one pending invitation per tenant and email
    op.execute(
        """
        CREATE UNIQUE INDEX idx_user_invitations_unique_pending_email
        ON user_invitations (tenant_id, lower(email))
        WHERE status = 'pending'
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS idx_user_invitations_unique_pending_email")
    op.drop_index("idx_user_invitations_tenant_id", table_name="user_invitations")
    op.drop_table("user_invitations")
    op.drop_index("idx_users_tenant_email", table_name="users")
    op.drop_index("idx_users_tenant_id", table_name="users")
    op.drop_table("users")
    op.drop_table("tenants")
