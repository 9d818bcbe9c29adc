"""
Service de Relatórios.

Agregações de tarefas usadas pelo painel, pelos calendários (vencimento e
competência) e pelo relatório consolidado. Os cálculos são puros sobre a
lista de tarefas; o storage é consultado apenas para carregar tarefas e os
nomes exibidos nos agrupamentos.
"""

from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import date, timedelta

from taskflow.db.base import utcnow
from taskflow.models.task import TaskStatus
from taskflow.schemas.report import (
    CompetenceGroup,
    DashboardStats,
    DueDateGroup,
    GroupSummary,
    StatusCount,
    TaskReport,
)
from taskflow.schemas.task import TaskRead
from taskflow.storage.base import Storage


def count_by_status(tasks: Iterable[TaskRead]) -> dict[TaskStatus, int]:
    """Contagem por status, com todos os status presentes."""
    counts = dict.fromkeys(TaskStatus, 0)
    for task in tasks:
        counts[task.status] += 1
    return counts


def summarize(
    tasks: list[TaskRead],
    key: Callable[[TaskRead], int | None],
    labels: dict[int, str],
) -> list[GroupSummary]:
    """
    Agrupa tarefas pela chave informada.

    Tarefas sem a chave são ignoradas. Grupos ordenados por total decrescente;
    empates mantêm a ordem de aparição.
    """
    groups: dict[int, list[TaskRead]] = defaultdict(list)
    for task in tasks:
        group_id = key(task)
        if group_id is not None:
            groups[group_id].append(task)

    summaries = [
        GroupSummary(
            id=group_id,
            label=labels.get(group_id, f"ID: {group_id}"),
            total=len(group),
            counts=count_by_status(group),
        )
        for group_id, group in groups.items()
    ]
    return sorted(summaries, key=lambda s: s.total, reverse=True)


class ReportService:
    """Service de indicadores e relatórios de tarefas."""

    def __init__(
        self,
        storage: Storage,
        upcoming_days: int = 7,
        today: Callable[[], date] = date.today,
    ):
        self._storage = storage
        self._upcoming_days = upcoming_days
        self._today = today

    @staticmethod
    def status_summary(tasks: list[TaskRead]) -> list[StatusCount]:
        """Quantidade e percentual (uma casa decimal) por status."""
        total = len(tasks)
        return [
            StatusCount(
                status=status,
                count=count,
                percentage=round(count / total * 100, 1) if total else 0.0,
            )
            for status, count in count_by_status(tasks).items()
        ]

    async def by_responsible(self, tasks: list[TaskRead]) -> list[GroupSummary]:
        labels = {user.id: user.name for user in await self._storage.get_users()}
        return summarize(tasks, lambda t: t.responsible_id, labels)

    async def by_department(self, tasks: list[TaskRead]) -> list[GroupSummary]:
        labels = {d.id: d.name for d in await self._storage.get_departments()}
        return summarize(tasks, lambda t: t.department_id, labels)

    async def by_company(self, tasks: list[TaskRead]) -> list[GroupSummary]:
        labels = {c.id: c.name for c in await self._storage.get_companies()}
        return summarize(tasks, lambda t: t.company_id, labels)

    @staticmethod
    def group_by_due_date(tasks: list[TaskRead]) -> list[DueDateGroup]:
        """Tarefas agrupadas por data de vencimento, em ordem cronológica."""
        groups: dict[date, list[TaskRead]] = defaultdict(list)
        for task in tasks:
            groups[task.due_date].append(task)
        return [DueDateGroup(due_date=day, tasks=groups[day]) for day in sorted(groups)]

    @staticmethod
    def group_by_competence(tasks: list[TaskRead]) -> list[CompetenceGroup]:
        """Tarefas agrupadas por competência (ano, mês), em ordem cronológica."""
        groups: dict[tuple[int, int], list[TaskRead]] = defaultdict(list)
        for task in tasks:
            groups[(task.competence_year, task.competence_month)].append(task)
        return [
            CompetenceGroup(
                competence_month=month,
                competence_year=year,
                tasks=groups[(year, month)],
                counts=count_by_status(groups[(year, month)]),
            )
            for year, month in sorted(groups)
        ]

    async def dashboard(self, today: date | None = None) -> DashboardStats:
        """
        Indicadores do painel.

        Próximos vencimentos: tarefas não concluídas que vencem depois de hoje
        e até `upcoming_days` dias à frente. Vencidas seguem a mesma regra de
        Storage.get_tasks_overdue, avaliada na data `today`.
        """
        today = today or self._today()
        horizon = today + timedelta(days=self._upcoming_days)
        tasks = await self._storage.get_tasks()
        open_tasks = [t for t in tasks if t.status != TaskStatus.COMPLETED]

        return DashboardStats(
            pending=len(open_tasks),
            due_today=sum(1 for t in tasks if t.due_date == today),
            upcoming_deadlines=sum(1 for t in open_tasks if today < t.due_date <= horizon),
            overdue=sum(1 for t in open_tasks if t.due_date < today),
        )

    async def task_report(self, department_id: int | None = None) -> TaskReport:
        """Relatório consolidado, opcionalmente restrito a um departamento."""
        tasks = await self._storage.get_tasks()
        if department_id is not None:
            tasks = [t for t in tasks if t.department_id == department_id]

        return TaskReport(
            generated_at=utcnow(),
            department_id=department_id,
            total=len(tasks),
            by_status=self.status_summary(tasks),
            by_responsible=await self.by_responsible(tasks),
            by_department=await self.by_department(tasks),
            by_company=await self.by_company(tasks),
        )
