"""
Schemas de Tarefa e Comentário.
"""

from datetime import date, datetime

from pydantic import Field, field_validator

from taskflow.models.obligation import Recurrence
from taskflow.models.task import TaskStatus
from taskflow.schemas.base import BaseSchema, IDMixin, TimestampMixin, UpdateSchema, to_date


class TaskBase(BaseSchema):
    """Campos base da tarefa."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None

    # Vencimento e competência são independentes
    due_date: date
    competence_month: int = Field(..., ge=1, le=12)
    competence_year: int = Field(..., ge=1900, le=9999)

    recurrence: Recurrence = Recurrence.NONE
    status: TaskStatus = TaskStatus.PENDING

    company_id: int | None = None
    department_id: int | None = None
    responsible_id: int | None = None
    contract_id: int | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def drop_time(cls, v):
        return to_date(v)


class TaskCreate(TaskBase):
    """Schema para criação de tarefa."""


class TaskUpdate(UpdateSchema):
    """Schema para atualização parcial de tarefa."""

    required_fields = frozenset({
        "title", "due_date", "competence_month", "competence_year", "recurrence", "status",
    })

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    due_date: date | None = None
    competence_month: int | None = Field(None, ge=1, le=12)
    competence_year: int | None = Field(None, ge=1900, le=9999)
    recurrence: Recurrence | None = None
    status: TaskStatus | None = None
    company_id: int | None = None
    department_id: int | None = None
    responsible_id: int | None = None
    contract_id: int | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def drop_time(cls, v):
        return to_date(v)


class TaskRead(TaskBase, IDMixin, TimestampMixin):
    """Registro da tarefa."""


class TaskFilters(BaseSchema):
    """
    Filtros de listagem de tarefas.

    Apenas um filtro é aplicado, na precedência empresa, departamento,
    responsável, status.
    """

    company_id: int | None = None
    department_id: int | None = None
    responsible_id: int | None = None
    status: TaskStatus | None = None


# ==================== COMENTÁRIO ====================

class TaskCommentCreate(BaseSchema):
    """Schema para adicionar comentário."""

    comment: str = Field(..., min_length=1)


class TaskCommentRead(BaseSchema, IDMixin):
    """Comentário de tarefa."""

    task_id: int
    user_id: int
    comment: str
    created: datetime
