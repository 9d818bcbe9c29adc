"""
Repository de metadados de Arquivo.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.file import File
from taskflow.repositories.base import BaseRepository


class FileRepository(BaseRepository[File]):
    """Repository para operações com Arquivo."""

    def __init__(self, db: AsyncSession):
        super().__init__(File, db)

    async def get_by_task(self, task_id: int) -> list[File]:
        return await self.list_by(File.task_id == task_id)

    async def get_by_contract(self, contract_id: int) -> list[File]:
        return await self.list_by(File.contract_id == contract_id)

    async def get_by_company(self, company_id: int) -> list[File]:
        return await self.list_by(File.company_id == company_id)
