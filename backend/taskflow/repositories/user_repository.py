"""
Repository do Usuário.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.user import User
from taskflow.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository para operações com Usuário."""

    unique_fields = ("username", "email")

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_username(self, username: str) -> User | None:
        """Busca usuário pelo username (comparação exata)."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Busca usuário por email."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
