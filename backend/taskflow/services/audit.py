"""
Service de Auditoria.

Registra quem fez o quê em qual entidade. Uma falha ao gravar a auditoria
nunca desfaz nem interrompe a operação que a originou.
"""

import structlog

from taskflow.core.exceptions import AuditWriteError
from taskflow.core.security import require_roles
from taskflow.models.user import UserRole
from taskflow.schemas.audit_log import AuditLogRead
from taskflow.schemas.user import UserRead
from taskflow.storage.base import Storage

logger = structlog.get_logger()

AUDIT_READER_ROLES = (UserRole.ADMIN, UserRole.MANAGER)


class AuditService:
    """Escrita e consulta do log de auditoria."""

    def __init__(self, storage: Storage):
        self._storage = storage

    async def record(
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str | None = None,
    ) -> AuditLogRead | None:
        """
        Registra uma entrada de auditoria.

        Nunca lança: em caso de falha, registra o erro no log da aplicação e
        retorna None.
        """
        try:
            return await self._storage.add_audit_log(
                actor_id, action, entity_type, entity_id, details
            )
        except Exception as e:
            error = AuditWriteError(action, entity_type)
            logger.error(
                error.message,
                code=error.code,
                actor_id=actor_id,
                entity_id=entity_id,
                error=str(e),
            )
            return None

    async def list_all(self, actor: UserRead) -> list[AuditLogRead]:
        require_roles(actor, AUDIT_READER_ROLES, "visualizar auditoria")
        return await self._storage.get_audit_logs()

    async def for_entity(
        self, actor: UserRead, entity_type: str, entity_id: int
    ) -> list[AuditLogRead]:
        require_roles(actor, AUDIT_READER_ROLES, "visualizar auditoria")
        return await self._storage.get_entity_audit_logs(entity_type, entity_id)

    async def for_user(self, actor: UserRead, user_id: int) -> list[AuditLogRead]:
        require_roles(actor, AUDIT_READER_ROLES, "visualizar auditoria")
        return await self._storage.get_user_audit_logs(user_id)
