"""
Repositories de Obrigação e do vínculo Empresa-Obrigação.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.obligation import CompanyObligation, Obligation
from taskflow.repositories.base import BaseRepository


class ObligationRepository(BaseRepository[Obligation]):
    """Repository para operações com Obrigação."""

    def __init__(self, db: AsyncSession):
        super().__init__(Obligation, db)


class CompanyObligationRepository(BaseRepository[CompanyObligation]):
    """Repository do vínculo Empresa-Obrigação."""

    def __init__(self, db: AsyncSession):
        super().__init__(CompanyObligation, db)

    async def get_link(self, company_id: int, obligation_id: int) -> CompanyObligation | None:
        """Busca o vínculo do par empresa/obrigação."""
        result = await self.db.execute(
            select(CompanyObligation).where(
                CompanyObligation.company_id == company_id,
                CompanyObligation.obligation_id == obligation_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_obligations_of_company(self, company_id: int) -> list[Obligation]:
        """Obrigações vinculadas à empresa; vínculos órfãos são descartados."""
        result = await self.db.execute(
            select(Obligation)
            .join(CompanyObligation, CompanyObligation.obligation_id == Obligation.id)
            .where(CompanyObligation.company_id == company_id)
            .order_by(CompanyObligation.id)
        )
        return list(result.scalars().all())
