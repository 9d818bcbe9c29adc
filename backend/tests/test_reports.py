"""
Testes de relatórios e indicadores do painel.
"""
from datetime import timedelta

import pytest
import pytest_asyncio

from taskflow.models.task import TaskStatus
from taskflow.schemas.task import TaskCreate
from taskflow.services import ReportService
from conftest import TODAY, make_company


@pytest_asyncio.fixture
async def tasks(storage, employee, manager):
    """Cinco tarefas espalhadas em torno de TODAY."""
    acme = await make_company(storage)
    fiscal = await storage.get_department_by_name("Fiscal")
    rh = await storage.get_department_by_name("RH")

    async def add(title, days, status, competence_month, **refs):
        return await storage.create_task(
            TaskCreate(
                title=title,
                due_date=TODAY + timedelta(days=days),
                status=status,
                competence_month=competence_month,
                competence_year=2024,
                **refs,
            )
        )

    return [
        await add("DAS", 0, TaskStatus.PENDING, 5,
                  company_id=acme.id, department_id=fiscal.id, responsible_id=employee.id),
        await add("DCTF", 3, TaskStatus.IN_PROGRESS, 5,
                  company_id=acme.id, department_id=fiscal.id, responsible_id=manager.id),
        await add("Folha", -2, TaskStatus.PENDING, 4,
                  department_id=rh.id, responsible_id=employee.id),
        await add("Balancete", -5, TaskStatus.COMPLETED, 4,
                  company_id=acme.id, responsible_id=employee.id),
        await add("Inventário", 10, TaskStatus.PENDING, 6, responsible_id=999),
    ]


def test_status_summary_without_tasks():
    """Testa percentuais sem tarefas."""
    summary = ReportService.status_summary([])

    assert [s.status for s in summary] == list(TaskStatus)
    assert all(s.count == 0 and s.percentage == 0.0 for s in summary)


@pytest.mark.asyncio
async def test_status_summary(tasks):
    """Testa contagem e percentual por status."""
    summary = {s.status: s for s in ReportService.status_summary(tasks)}

    assert summary[TaskStatus.PENDING].count == 3
    assert summary[TaskStatus.PENDING].percentage == 60.0
    assert summary[TaskStatus.IN_PROGRESS].percentage == 20.0
    assert summary[TaskStatus.COMPLETED].percentage == 20.0
    assert summary[TaskStatus.OVERDUE].count == 0


@pytest.mark.asyncio
async def test_by_responsible(report_service, tasks, employee, manager):
    """Testa agrupamento por responsável, inclusive usuário inexistente."""
    groups = await report_service.by_responsible(tasks)

    assert [(g.id, g.label, g.total) for g in groups] == [
        (employee.id, "Joana", 3),
        (manager.id, "Gerente", 1),
        (999, "ID: 999", 1),
    ]
    assert groups[0].counts[TaskStatus.PENDING] == 2
    assert groups[0].counts[TaskStatus.COMPLETED] == 1


@pytest.mark.asyncio
async def test_by_department_and_company(report_service, tasks):
    """Testa que tarefas sem vínculo ficam fora dos agrupamentos."""
    departments = await report_service.by_department(tasks)
    companies = await report_service.by_company(tasks)

    assert [(g.label, g.total) for g in departments] == [("Fiscal", 2), ("RH", 1)]
    assert [(g.label, g.total) for g in companies] == [("Acme", 3)]


@pytest.mark.asyncio
async def test_group_by_due_date(tasks):
    """Testa calendário por vencimento em ordem cronológica."""
    groups = ReportService.group_by_due_date(tasks)

    assert [g.due_date for g in groups] == sorted(t.due_date for t in tasks)
    assert [g.tasks[0].title for g in groups] == ["Balancete", "Folha", "DAS", "DCTF", "Inventário"]


@pytest.mark.asyncio
async def test_group_by_competence(tasks):
    """Testa calendário por competência."""
    groups = ReportService.group_by_competence(tasks)

    assert [g.label for g in groups] == ["04/2024", "05/2024", "06/2024"]
    assert [t.title for t in groups[0].tasks] == ["Folha", "Balancete"]
    assert groups[0].counts[TaskStatus.COMPLETED] == 1


@pytest.mark.asyncio
async def test_dashboard(report_service, tasks):
    """Testa indicadores do painel na data fixa."""
    stats = await report_service.dashboard()

    assert stats.pending == 4
    assert stats.due_today == 1
    assert stats.upcoming_deadlines == 1
    assert stats.overdue == 1


@pytest.mark.asyncio
async def test_dashboard_other_day(report_service, tasks):
    """Testa o painel avaliado em outra data."""
    stats = await report_service.dashboard(TODAY + timedelta(days=3))

    assert stats.due_today == 1
    assert stats.upcoming_deadlines == 1
    assert stats.overdue == 2


@pytest.mark.asyncio
async def test_task_report(report_service, tasks, storage):
    """Testa relatório consolidado geral e por departamento."""
    fiscal = await storage.get_department_by_name("Fiscal")

    general = await report_service.task_report()
    by_fiscal = await report_service.task_report(department_id=fiscal.id)

    assert general.total == 5
    assert general.department_id is None
    assert by_fiscal.total == 2
    assert by_fiscal.department_id == fiscal.id
    assert [(g.label, g.total) for g in by_fiscal.by_department] == [("Fiscal", 2)]
    assert [g.label for g in by_fiscal.by_responsible] == ["Joana", "Gerente"]
