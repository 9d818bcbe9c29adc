"""
Service de Usuários.

Nenhum método expõe o hash da senha: as leituras devolvem UserResponse.
"""

import structlog

from taskflow.core.exceptions import (
    InsufficientPermissionsError,
    ResourceAlreadyExistsError,
)
from taskflow.core.security import get_password_hash
from taskflow.models.user import UserRole
from taskflow.schemas.department import DepartmentRead
from taskflow.schemas.user import UserRead, UserResponse, UserUpdate
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


def to_response(user: UserRead) -> UserResponse:
    """Remove a credencial do registro do usuário."""
    return UserResponse.model_validate(user.model_dump(exclude={"password"}))


class UserService:
    """Service para consulta e edição de usuários."""

    def __init__(self, storage: Storage, audit: AuditService):
        self._storage = storage
        self._audit = audit

    async def get(self, user_id: int) -> UserResponse:
        user = ensure_found(await self._storage.get_user(user_id), "Usuário", user_id)
        return to_response(user)

    async def list_users(self) -> list[UserResponse]:
        return [to_response(user) for user in await self._storage.get_users()]

    async def update(self, actor: UserRead, user_id: int, data: UserUpdate) -> UserResponse:
        """
        Atualiza usuário.

        Apenas administradores ou o próprio usuário podem editar o perfil, e
        apenas administradores podem alterar o papel. Uma nova senha é
        gravada em hash.
        """
        if actor.role != UserRole.ADMIN and actor.id != user_id:
            raise InsufficientPermissionsError("editar este usuário")

        changes = data.changes()
        if "role" in changes and actor.role != UserRole.ADMIN:
            raise InsufficientPermissionsError("alterar papel de usuário")

        ensure_found(await self._storage.get_user(user_id), "Usuário", user_id)

        if "username" in changes:
            existing = await self._storage.get_user_by_username(changes["username"])
            if existing is not None and existing.id != user_id:
                raise ResourceAlreadyExistsError("Usuário", "username", changes["username"])
        if "email" in changes:
            existing = await self._storage.get_user_by_email(changes["email"])
            if existing is not None and existing.id != user_id:
                raise ResourceAlreadyExistsError("Usuário", "email", changes["email"])

        if "password" in changes:
            data = data.model_copy(update={"password": get_password_hash(changes["password"])})

        user = ensure_found(await self._storage.update_user(user_id, data), "Usuário", user_id)

        await self._audit.record(
            actor.id, "updated", "user", user_id, f"Usuário {user.username} atualizado"
        )
        logger.info("Usuário atualizado", user_id=user_id, fields=sorted(changes))
        return to_response(user)

    async def departments(self, user_id: int) -> list[DepartmentRead]:
        return await self._storage.get_user_departments(user_id)
