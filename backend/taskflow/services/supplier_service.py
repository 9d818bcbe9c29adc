"""
Service de Fornecedores.
"""

import structlog

from taskflow.core.exceptions import ResourceAlreadyExistsError
from taskflow.core.security import require_roles
from taskflow.models.user import UserRole
from taskflow.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class SupplierService:
    """Service para operações com Fornecedor."""

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def get(self, supplier_id: int) -> SupplierRead:
        return ensure_found(
            await self._storage.get_supplier(supplier_id), "Fornecedor", supplier_id
        )

    async def list_suppliers(self) -> list[SupplierRead]:
        return await self._storage.get_suppliers()

    async def create(self, actor: UserRead, data: SupplierCreate) -> SupplierRead:
        """Cria fornecedor. O documento (CPF/CNPJ) deve ser único."""
        if await self._storage.get_supplier_by_document(data.document) is not None:
            raise ResourceAlreadyExistsError("Fornecedor", "document", data.document)

        supplier = await self._storage.create_supplier(data)
        await self._audit.record(
            actor.id, "created", "supplier", supplier.id, f"Fornecedor {supplier.name} criado"
        )
        logger.info("Fornecedor criado", supplier_id=supplier.id)
        return supplier

    async def update(
        self, actor: UserRead, supplier_id: int, data: SupplierUpdate
    ) -> SupplierRead:
        """Atualiza fornecedor; campos opcionais enviados como None são apagados."""
        changes = data.changes()
        if "document" in changes:
            existing = await self._storage.get_supplier_by_document(changes["document"])
            if existing is not None and existing.id != supplier_id:
                raise ResourceAlreadyExistsError("Fornecedor", "document", changes["document"])

        supplier = ensure_found(
            await self._storage.update_supplier(supplier_id, data), "Fornecedor", supplier_id
        )
        await self._audit.record(
            actor.id, "updated", "supplier", supplier_id, f"Fornecedor {supplier.name} atualizado"
        )
        return supplier

    async def delete(self, actor: UserRead, supplier_id: int) -> None:
        require_roles(actor, (UserRole.ADMIN, UserRole.MANAGER), "excluir fornecedor")

        supplier = await self.get(supplier_id)
        await self._storage.delete_supplier(supplier_id)
        await self._audit.record(
            actor.id, "deleted", "supplier", supplier_id, f"Fornecedor {supplier.name} excluído"
        )
