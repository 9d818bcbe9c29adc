"""
Service de Obrigações acessórias.
"""

from taskflow.schemas.obligation import ObligationCreate, ObligationRead, ObligationUpdate
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage


class ObligationService:
    """Service para o catálogo de obrigações."""

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def get(self, obligation_id: int) -> ObligationRead:
        return ensure_found(
            await self._storage.get_obligation(obligation_id), "Obrigação", obligation_id
        )

    async def list_obligations(self) -> list[ObligationRead]:
        return await self._storage.get_obligations()

    async def create(self, actor: UserRead, data: ObligationCreate) -> ObligationRead:
        obligation = await self._storage.create_obligation(data)
        await self._audit.record(
            actor.id, "created", "obligation", obligation.id,
            f"Obrigação {obligation.name} criada",
        )
        return obligation

    async def update(
        self, actor: UserRead, obligation_id: int, data: ObligationUpdate
    ) -> ObligationRead:
        obligation = ensure_found(
            await self._storage.update_obligation(obligation_id, data), "Obrigação", obligation_id
        )
        await self._audit.record(
            actor.id, "updated", "obligation", obligation_id,
            f"Obrigação {obligation.name} atualizada",
        )
        return obligation

    async def delete(self, actor: UserRead, obligation_id: int) -> None:
        """Remove obrigação. Vínculos com empresas ficam órfãos e deixam de ser listados."""
        obligation = await self.get(obligation_id)
        await self._storage.delete_obligation(obligation_id)
        await self._audit.record(
            actor.id, "deleted", "obligation", obligation_id,
            f"Obrigação {obligation.name} excluída",
        )
