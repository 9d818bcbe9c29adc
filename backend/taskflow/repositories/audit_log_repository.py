"""
Repository do Log de Auditoria.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.audit_log import AuditLog
from taskflow.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository do log de auditoria. Listagens vêm dos mais recentes aos mais antigos."""

    def __init__(self, db: AsyncSession):
        super().__init__(AuditLog, db)

    async def get_newest_first(self, *conditions: Any) -> list[AuditLog]:
        result = await self.db.execute(
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_entity(self, entity_type: str, entity_id: int) -> list[AuditLog]:
        return await self.get_newest_first(
            AuditLog.entity_type == entity_type,
            AuditLog.entity_id == entity_id,
        )

    async def get_by_user(self, user_id: int) -> list[AuditLog]:
        return await self.get_newest_first(AuditLog.user_id == user_id)
