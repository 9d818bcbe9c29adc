"""
Repositories de Tarefa e Comentário.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.task import Task, TaskComment, TaskStatus
from taskflow.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository para operações com Tarefa."""

    touch_fields = ("updated",)

    def __init__(self, db: AsyncSession):
        super().__init__(Task, db)

    async def get_by_company(self, company_id: int) -> list[Task]:
        return await self.list_by(Task.company_id == company_id)

    async def get_by_department(self, department_id: int) -> list[Task]:
        return await self.list_by(Task.department_id == department_id)

    async def get_by_responsible(self, responsible_id: int) -> list[Task]:
        return await self.list_by(Task.responsible_id == responsible_id)

    async def get_by_status(self, status: TaskStatus) -> list[Task]:
        return await self.list_by(Task.status == status)

    async def get_due_on(self, day: date) -> list[Task]:
        """Tarefas com vencimento exatamente em `day`."""
        return await self.list_by(Task.due_date == day)

    async def get_overdue(self, today: date) -> list[Task]:
        """Tarefas não concluídas com vencimento anterior a `today`."""
        return await self.list_by(
            Task.due_date < today,
            Task.status != TaskStatus.COMPLETED,
        )


class TaskCommentRepository(BaseRepository[TaskComment]):
    """Repository de comentários (apenas inserção)."""

    def __init__(self, db: AsyncSession):
        super().__init__(TaskComment, db)

    async def get_by_task(self, task_id: int) -> list[TaskComment]:
        """Comentários da tarefa, do mais antigo para o mais recente."""
        result = await self.db.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created, TaskComment.id)
        )
        return list(result.scalars().all())
