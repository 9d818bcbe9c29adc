"""
Service de Departamentos e do vínculo Usuário-Departamento.
"""

import structlog

from taskflow.core.exceptions import ResourceAlreadyExistsError, ResourceNotFoundError
from taskflow.core.security import require_roles
from taskflow.models.user import UserRole
from taskflow.schemas.department import (
    DepartmentCreate,
    DepartmentRead,
    DepartmentUpdate,
    UserDepartmentRead,
)
from taskflow.schemas.user import UserRead, UserResponse
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.services.user_service import to_response
from taskflow.storage.base import Storage

logger = structlog.get_logger()

MANAGER_ROLES = (UserRole.ADMIN, UserRole.MANAGER)


class DepartmentService:
    """
    Service para gestão de departamentos.

    Criação, edição e vínculos exigem admin ou manager; exclusão, apenas admin.
    """

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def get(self, department_id: int) -> DepartmentRead:
        return ensure_found(
            await self._storage.get_department(department_id), "Departamento", department_id
        )

    async def list_departments(self) -> list[DepartmentRead]:
        return await self._storage.get_departments()

    async def create(self, actor: UserRead, data: DepartmentCreate) -> DepartmentRead:
        require_roles(actor, MANAGER_ROLES, "criar departamento")

        if await self._storage.get_department_by_name(data.name) is not None:
            raise ResourceAlreadyExistsError("Departamento", "name", data.name)

        department = await self._storage.create_department(data)
        await self._audit.record(
            actor.id, "created", "department", department.id,
            f"Departamento {department.name} criado",
        )
        logger.info("Departamento criado", department_id=department.id, name=department.name)
        return department

    async def update(
        self, actor: UserRead, department_id: int, data: DepartmentUpdate
    ) -> DepartmentRead:
        require_roles(actor, MANAGER_ROLES, "editar departamento")

        changes = data.changes()
        if "name" in changes:
            existing = await self._storage.get_department_by_name(changes["name"])
            if existing is not None and existing.id != department_id:
                raise ResourceAlreadyExistsError("Departamento", "name", changes["name"])

        department = ensure_found(
            await self._storage.update_department(department_id, data),
            "Departamento",
            department_id,
        )
        await self._audit.record(
            actor.id, "updated", "department", department_id,
            f"Departamento {department.name} atualizado",
        )
        return department

    async def delete(self, actor: UserRead, department_id: int) -> None:
        """Remove departamento. Vínculos existentes ficam órfãos."""
        require_roles(actor, (UserRole.ADMIN,), "excluir departamento")

        department = await self.get(department_id)
        await self._storage.delete_department(department_id)
        await self._audit.record(
            actor.id, "deleted", "department", department_id,
            f"Departamento {department.name} excluído",
        )
        logger.info("Departamento excluído", department_id=department_id)

    async def assign_user(
        self, actor: UserRead, user_id: int, department_id: int
    ) -> UserDepartmentRead:
        require_roles(actor, MANAGER_ROLES, "vincular usuário a departamento")

        user = ensure_found(await self._storage.get_user(user_id), "Usuário", user_id)
        department = await self.get(department_id)

        link = await self._storage.assign_user_to_department(user_id, department_id)
        await self._audit.record(
            actor.id, "assigned", "user_department", link.id,
            f"Usuário {user.username} vinculado ao departamento {department.name}",
        )
        return link

    async def remove_user(self, actor: UserRead, user_id: int, department_id: int) -> None:
        require_roles(actor, MANAGER_ROLES, "desvincular usuário de departamento")

        user = ensure_found(await self._storage.get_user(user_id), "Usuário", user_id)
        department = await self.get(department_id)

        if not await self._storage.remove_user_from_department(user_id, department_id):
            raise ResourceNotFoundError("Vínculo usuário-departamento")

        await self._audit.record(
            actor.id, "removed", "user_department", user_id,
            f"Usuário {user.username} removido do departamento {department.name}",
        )

    async def users(self, department_id: int) -> list[UserResponse]:
        return [to_response(user) for user in await self._storage.get_department_users(department_id)]
