"""
Repository do Fornecedor.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.supplier import Supplier
from taskflow.repositories.base import BaseRepository


class SupplierRepository(BaseRepository[Supplier]):
    """Repository para operações com Fornecedor."""

    unique_fields = ("document",)

    def __init__(self, db: AsyncSession):
        super().__init__(Supplier, db)

    async def get_by_document(self, document: str) -> Supplier | None:
        """Busca fornecedor pelo documento (CPF/CNPJ)."""
        result = await self.db.execute(select(Supplier).where(Supplier.document == document))
        return result.scalar_one_or_none()
