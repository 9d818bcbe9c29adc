"""
Schemas do Log de Auditoria.
"""

from datetime import datetime

from taskflow.schemas.base import BaseSchema, IDMixin


class AuditLogCreate(BaseSchema):
    """Entrada de auditoria a registrar."""

    user_id: int
    action: str
    entity_type: str
    entity_id: int
    details: str | None = None


class AuditLogRead(AuditLogCreate, IDMixin):
    """Entrada de auditoria registrada."""

    timestamp: datetime
