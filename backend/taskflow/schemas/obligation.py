"""
Schemas de Obrigação e do vínculo Empresa-Obrigação.
"""

from pydantic import Field

from taskflow.models.obligation import Recurrence
from taskflow.schemas.base import BaseSchema, IDMixin, UpdateSchema


class ObligationBase(BaseSchema):
    """Campos base da obrigação."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    due_day: int = Field(..., ge=1, le=31, description="Dia de vencimento no mês")
    recurrence: Recurrence


class ObligationCreate(ObligationBase):
    """Schema para criação de obrigação."""


class ObligationUpdate(UpdateSchema):
    """Schema para atualização parcial de obrigação."""

    required_fields = frozenset({"name", "due_day", "recurrence"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    due_day: int | None = Field(None, ge=1, le=31)
    recurrence: Recurrence | None = None


class ObligationRead(ObligationBase, IDMixin):
    """Registro da obrigação."""


class CompanyObligationCreate(BaseSchema):
    """Schema para vincular obrigação a empresa."""

    company_id: int
    obligation_id: int
    responsible_id: int | None = None


class CompanyObligationRead(CompanyObligationCreate, IDMixin):
    """Vínculo entre empresa e obrigação."""
