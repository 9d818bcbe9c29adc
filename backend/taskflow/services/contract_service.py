"""
Service de Contratos.
"""

import structlog

from taskflow.core.security import require_roles
from taskflow.models.user import UserRole
from taskflow.schemas.contract import (
    ContractCreate,
    ContractFilters,
    ContractRead,
    ContractUpdate,
)
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class ContractService:
    """
    Service para operações com Contrato.

    Todo contrato pertence a uma empresa existente.
    """

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def _check_references(
        self,
        company_id: int | None = None,
        responsible_id: int | None = None,
        department_id: int | None = None,
    ) -> None:
        if company_id is not None:
            ensure_found(await self._storage.get_company(company_id), "Empresa", company_id)
        if responsible_id is not None:
            ensure_found(await self._storage.get_user(responsible_id), "Responsável", responsible_id)
        if department_id is not None:
            ensure_found(
                await self._storage.get_department(department_id), "Departamento", department_id
            )

    async def get(self, contract_id: int) -> ContractRead:
        return ensure_found(await self._storage.get_contract(contract_id), "Contrato", contract_id)

    async def list_contracts(self, filters: ContractFilters | None = None) -> list[ContractRead]:
        """Lista contratos; precedência dos filtros: empresa, responsável, status."""
        filters = filters or ContractFilters()
        if filters.company_id is not None:
            return await self._storage.get_contracts_by_company(filters.company_id)
        if filters.responsible_id is not None:
            return await self._storage.get_contracts_by_responsible(filters.responsible_id)
        if filters.status is not None:
            return await self._storage.get_contracts_by_status(filters.status)
        return await self._storage.get_contracts()

    async def create(self, actor: UserRead, data: ContractCreate) -> ContractRead:
        await self._check_references(data.company_id, data.responsible_id, data.department_id)

        contract = await self._storage.create_contract(data)
        await self._audit.record(
            actor.id, "created", "contract", contract.id, f"Contrato {contract.number} criado"
        )
        logger.info("Contrato criado", contract_id=contract.id, company_id=contract.company_id)
        return contract

    async def update(
        self, actor: UserRead, contract_id: int, data: ContractUpdate
    ) -> ContractRead:
        await self.get(contract_id)

        changes = data.changes()
        await self._check_references(
            changes.get("company_id"),
            changes.get("responsible_id"),
            changes.get("department_id"),
        )

        contract = ensure_found(
            await self._storage.update_contract(contract_id, data), "Contrato", contract_id
        )
        await self._audit.record(
            actor.id, "updated", "contract", contract_id, f"Contrato {contract.number} atualizado"
        )
        return contract

    async def delete(self, actor: UserRead, contract_id: int) -> None:
        require_roles(actor, (UserRole.ADMIN, UserRole.MANAGER), "excluir contrato")

        contract = await self.get(contract_id)
        await self._storage.delete_contract(contract_id)
        await self._audit.record(
            actor.id, "deleted", "contract", contract_id, f"Contrato {contract.number} excluído"
        )
