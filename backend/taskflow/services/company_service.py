"""
Service de Empresas e de suas obrigações.
"""

import structlog

from taskflow.core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError
from taskflow.core.security import require_roles
from taskflow.models.user import UserRole
from taskflow.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from taskflow.schemas.obligation import CompanyObligationRead, ObligationRead
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class CompanyService:
    """Service para operações com Empresa."""

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def get(self, company_id: int) -> CompanyRead:
        return ensure_found(await self._storage.get_company(company_id), "Empresa", company_id)

    async def list_companies(self) -> list[CompanyRead]:
        return await self._storage.get_companies()

    async def create(self, actor: UserRead, data: CompanyCreate) -> CompanyRead:
        """Cria empresa. O CNPJ deve ser único."""
        if await self._storage.get_company_by_cnpj(data.cnpj) is not None:
            raise ResourceAlreadyExistsError("Empresa", "cnpj", data.cnpj)

        company = await self._storage.create_company(data)
        await self._audit.record(
            actor.id, "created", "company", company.id, f"Empresa {company.name} criada"
        )
        logger.info("Empresa criada", company_id=company.id, cnpj=company.cnpj)
        return company

    async def update(self, actor: UserRead, company_id: int, data: CompanyUpdate) -> CompanyRead:
        changes = data.changes()
        if "cnpj" in changes:
            existing = await self._storage.get_company_by_cnpj(changes["cnpj"])
            if existing is not None and existing.id != company_id:
                raise ResourceAlreadyExistsError("Empresa", "cnpj", changes["cnpj"])

        company = ensure_found(
            await self._storage.update_company(company_id, data), "Empresa", company_id
        )
        await self._audit.record(
            actor.id, "updated", "company", company_id, f"Empresa {company.name} atualizada"
        )
        return company

    async def delete(self, actor: UserRead, company_id: int) -> None:
        require_roles(actor, (UserRole.ADMIN, UserRole.MANAGER), "excluir empresa")

        company = await self.get(company_id)
        await self._storage.delete_company(company_id)
        await self._audit.record(
            actor.id, "deleted", "company", company_id, f"Empresa {company.name} excluída"
        )
        logger.info("Empresa excluída", company_id=company_id)

    async def assign_obligation(
        self,
        actor: UserRead,
        company_id: int,
        obligation_id: int,
        responsible_id: int | None = None,
    ) -> CompanyObligationRead:
        """Vincula obrigação à empresa, com responsável opcional."""
        company = await self.get(company_id)
        obligation = ensure_found(
            await self._storage.get_obligation(obligation_id), "Obrigação", obligation_id
        )
        if responsible_id is not None:
            ensure_found(await self._storage.get_user(responsible_id), "Responsável", responsible_id)

        link = await self._storage.assign_obligation_to_company(
            company_id, obligation_id, responsible_id
        )
        await self._audit.record(
            actor.id, "assigned", "company_obligation", link.id,
            f"Obrigação {obligation.name} vinculada à empresa {company.name}",
        )
        return link

    async def remove_obligation(
        self, actor: UserRead, company_id: int, obligation_id: int
    ) -> None:
        if not await self._storage.remove_obligation_from_company(company_id, obligation_id):
            raise ResourceNotFoundError("Vínculo empresa-obrigação")

        await self._audit.record(
            actor.id, "removed", "company_obligation", company_id,
            f"Obrigação {obligation_id} desvinculada da empresa {company_id}",
        )

    async def obligations(self, company_id: int) -> list[ObligationRead]:
        return await self._storage.get_company_obligations(company_id)
