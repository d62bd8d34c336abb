"""PostgreSQL implementation of User repository."""

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from protrack.domain.model import User
from protrack.domain.repository import UserRepository
from protrack.domain.value import Email, TenantScope, UserId, require_scope
from protrack.persistence.mappers import row_to_user, user_to_dict
from protrack.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find the user record bound to an identity.

        Args:
            user_id: Identity id

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_in_tenant(
        self, scope: TenantScope | None, user_id: UserId
    ) -> User | None:
        """Find a user record within a tenant."""
        scope = require_scope(scope, "find_in_tenant")
        stmt = select(users_table).where(
            and_(
                users_table.c.id == user_id,
                users_table.c.tenant_id == scope.tenant_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email_in_tenant(
        self, scope: TenantScope | None, email: Email
    ) -> User | None:
        """Find a tenant member by email."""
        scope = require_scope(scope, "find_by_email_in_tenant")
        stmt = select(users_table).where(
            and_(
                users_table.c.tenant_id == scope.tenant_id,
                users_table.c.email == email.root,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def list_by_tenant(self, scope: TenantScope | None) -> list[User]:
        """List users of a tenant, oldest first."""
        scope = require_scope(scope, "list_by_tenant")
        stmt = (
            select(users_table)
            .where(users_table.c.tenant_id == scope.tenant_id)
            .order_by(users_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Upsert a user record keyed by id.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={key: value for key, value in values.items() if key != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
