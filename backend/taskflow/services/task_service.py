"""
Service de Tarefas e Comentários.

Valida as referências (empresa, departamento, responsável, contrato) antes de
gravar, já que o storage não garante integridade referencial.
"""

import structlog

from taskflow.models.task import TaskStatus
from taskflow.schemas.task import (
    TaskCommentCreate,
    TaskCommentRead,
    TaskCreate,
    TaskFilters,
    TaskRead,
    TaskUpdate,
)
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class TaskService:
    """Service para operações com Tarefa."""

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def _check_references(
        self,
        company_id: int | None = None,
        department_id: int | None = None,
        responsible_id: int | None = None,
        contract_id: int | None = None,
    ) -> None:
        if company_id is not None:
            ensure_found(await self._storage.get_company(company_id), "Empresa", company_id)
        if department_id is not None:
            ensure_found(
                await self._storage.get_department(department_id), "Departamento", department_id
            )
        if responsible_id is not None:
            ensure_found(await self._storage.get_user(responsible_id), "Responsável", responsible_id)
        if contract_id is not None:
            ensure_found(await self._storage.get_contract(contract_id), "Contrato", contract_id)

    async def get(self, task_id: int) -> TaskRead:
        return ensure_found(await self._storage.get_task(task_id), "Tarefa", task_id)

    async def list_tasks(self, filters: TaskFilters | None = None) -> list[TaskRead]:
        """
        Lista tarefas.

        Apenas o primeiro filtro informado é aplicado, na ordem: empresa,
        departamento, responsável, status.
        """
        filters = filters or TaskFilters()
        if filters.company_id is not None:
            return await self._storage.get_tasks_by_company(filters.company_id)
        if filters.department_id is not None:
            return await self._storage.get_tasks_by_department(filters.department_id)
        if filters.responsible_id is not None:
            return await self._storage.get_tasks_by_responsible(filters.responsible_id)
        if filters.status is not None:
            return await self._storage.get_tasks_by_status(filters.status)
        return await self._storage.get_tasks()

    async def due_today(self) -> list[TaskRead]:
        return await self._storage.get_tasks_due_today()

    async def overdue(self) -> list[TaskRead]:
        return await self._storage.get_tasks_overdue()

    async def create(self, actor: UserRead, data: TaskCreate) -> TaskRead:
        await self._check_references(
            data.company_id, data.department_id, data.responsible_id, data.contract_id
        )

        task = await self._storage.create_task(data)
        await self._audit.record(actor.id, "created", "task", task.id, f"Tarefa {task.title} criada")
        logger.info("Tarefa criada", task_id=task.id, due_date=task.due_date.isoformat())
        return task

    async def update(self, actor: UserRead, task_id: int, data: TaskUpdate) -> TaskRead:
        await self.get(task_id)

        changes = data.changes()
        await self._check_references(
            changes.get("company_id"),
            changes.get("department_id"),
            changes.get("responsible_id"),
            changes.get("contract_id"),
        )

        task = ensure_found(await self._storage.update_task(task_id, data), "Tarefa", task_id)
        await self._audit.record(
            actor.id, "updated", "task", task_id, f"Tarefa {task.title} atualizada"
        )
        return task

    async def delete(self, actor: UserRead, task_id: int) -> None:
        task = await self.get(task_id)
        await self._storage.delete_task(task_id)
        await self._audit.record(actor.id, "deleted", "task", task_id, f"Tarefa {task.title} excluída")

    async def add_comment(
        self, actor: UserRead, task_id: int, data: TaskCommentCreate
    ) -> TaskCommentRead:
        task = await self.get(task_id)
        comment = await self._storage.add_task_comment(task_id, actor.id, data.comment)
        await self._audit.record(
            actor.id, "commented", "task", task_id, f"Comentário adicionado à tarefa {task.title}"
        )
        return comment

    async def comments(self, task_id: int) -> list[TaskCommentRead]:
        await self.get(task_id)
        return await self._storage.get_task_comments(task_id)

    async def sync_overdue_statuses(self, actor: UserRead) -> list[TaskRead]:
        """
        Grava o status overdue nas tarefas vencidas.

        O status armazenado pertence ao chamador; nenhuma leitura o altera.
        Esta operação é a transição explícita, auditada por tarefa.
        """
        updated = []
        for task in await self._storage.get_tasks_overdue():
            if task.status == TaskStatus.OVERDUE:
                continue
            result = await self._storage.update_task(
                task.id, TaskUpdate(status=TaskStatus.OVERDUE)
            )
            if result is None:
                continue
            await self._audit.record(
                actor.id, "updated", "task", task.id,
                f"Tarefa {task.title} marcada como atrasada",
            )
            updated.append(result)

        if updated:
            logger.info("Status de tarefas atrasadas sincronizado", total=len(updated))
        return updated
