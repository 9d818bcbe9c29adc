"""
Repository do Contrato.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.contract import Contract, ContractStatus
from taskflow.repositories.base import BaseRepository


class ContractRepository(BaseRepository[Contract]):
    """Repository para operações com Contrato."""

    touch_fields = ("updated",)

    def __init__(self, db: AsyncSession):
        super().__init__(Contract, db)

    async def get_by_company(self, company_id: int) -> list[Contract]:
        return await self.list_by(Contract.company_id == company_id)

    async def get_by_responsible(self, responsible_id: int) -> list[Contract]:
        return await self.list_by(Contract.responsible_id == responsible_id)

    async def get_by_status(self, status: ContractStatus) -> list[Contract]:
        return await self.list_by(Contract.status == status)
