"""SQLAlchemy table definitions for ProTrack.

These table definitions are used with SQLAlchemy Core. They match the schema
defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# TENANTS TABLE
# ============================================================================
tenants_table = Table(
    "tenants",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("subdomain", String(50), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50), nullable=True),
    Column("plan", String(50), nullable=False, server_default="professional"),
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# ============================================================================
# USERS TABLE (id is the identity provider's user id)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "tenant_id", UUID, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True
    ),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("role", String(20), nullable=False, server_default="entry"),
    Column("permissions", JSONB, nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

Index("idx_users_tenant_id", users_table.c.tenant_id)
Index("idx_users_tenant_email", users_table.c.tenant_id, users_table.c.email)

# ============================================================================
# USER INVITATIONS TABLE
# ============================================================================
user_invitations_table = Table(
    "user_invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "tenant_id", UUID, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    ),
    Column("email", String(255), nullable=False),
    Column("role", String(20), nullable=False),
    Column("permissions", JSONB, nullable=False),
    Column(
        "invited_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("invitation_token", String(255), nullable=False, unique=True),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

Index("idx_user_invitations_tenant_id", user_invitations_table.c.tenant_id)

# Only one pending invitation per email and tenant
Index(
    "idx_user_invitations_unique_pending_email",
    user_invitations_table.c.tenant_id,
    func.lower(user_invitations_table.c.email),
    unique=True,
    postgresql_where=user_invitations_table.c.status == "pending",
)
