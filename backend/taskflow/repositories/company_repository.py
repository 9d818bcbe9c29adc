"""
Repository da Empresa.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.company import Company
from taskflow.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository para operações com Empresa."""

    unique_fields = ("cnpj",)

    def __init__(self, db: AsyncSession):
        super().__init__(Company, db)

    async def get_by_cnpj(self, cnpj: str) -> Company | None:
        """Busca empresa por CNPJ."""
        result = await self.db.execute(select(Company).where(Company.cnpj == cnpj))
        return result.scalar_one_or_none()
