"""
Schemas de relatórios, dashboard e agrupamentos de calendário.
"""

from datetime import date, datetime

from taskflow.models.task import TaskStatus
from taskflow.schemas.base import BaseSchema
from taskflow.schemas.task import TaskRead


class StatusCount(BaseSchema):
    """Quantidade e percentual de tarefas em um status."""

    status: TaskStatus
    count: int
    percentage: float


class GroupSummary(BaseSchema):
    """Totais de tarefas por responsável, departamento ou empresa."""

    id: int
    label: str
    total: int
    counts: dict[TaskStatus, int]


class DueDateGroup(BaseSchema):
    """Tarefas que vencem em uma data."""

    due_date: date
    tasks: list[TaskRead]


class CompetenceGroup(BaseSchema):
    """Tarefas de um período de competência, com contagem por status."""

    competence_month: int
    competence_year: int
    tasks: list[TaskRead]
    counts: dict[TaskStatus, int]

    @property
    def label(self) -> str:
        """Competência no formato MM/AAAA."""
        return f"{self.competence_month:02d}/{self.competence_year}"


class DashboardStats(BaseSchema):
    """Indicadores do painel inicial."""

    pending: int
    due_today: int
    upcoming_deadlines: int
    overdue: int


class TaskReport(BaseSchema):
    """Relatório consolidado de tarefas."""

    generated_at: datetime
    department_id: int | None = None
    total: int
    by_status: list[StatusCount]
    by_responsible: list[GroupSummary]
    by_department: list[GroupSummary]
    by_company: list[GroupSummary]
