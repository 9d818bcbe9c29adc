"""
Repositories de Departamento e do vínculo Usuário-Departamento.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models.department import Department, UserDepartment
from taskflow.models.user import User
from taskflow.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    """Repository para operações com Departamento."""

    unique_fields = ("name",)

    def __init__(self, db: AsyncSession):
        super().__init__(Department, db)

    async def get_by_name(self, name: str) -> Department | None:
        """Busca departamento pelo nome."""
        result = await self.db.execute(select(Department).where(Department.name == name))
        return result.scalar_one_or_none()

    async def count(self) -> int:
        """Quantidade de departamentos cadastrados."""
        result = await self.db.execute(select(func.count()).select_from(Department))
        return result.scalar_one()


class UserDepartmentRepository(BaseRepository[UserDepartment]):
    """Repository do vínculo Usuário-Departamento."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserDepartment, db)

    async def get_link(self, user_id: int, department_id: int) -> UserDepartment | None:
        """Busca o vínculo do par usuário/departamento."""
        result = await self.db.execute(
            select(UserDepartment).where(
                UserDepartment.user_id == user_id,
                UserDepartment.department_id == department_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_departments_of_user(self, user_id: int) -> list[Department]:
        """
        Departamentos vinculados ao usuário, na ordem dos vínculos.

        O inner join descarta vínculos de departamentos já excluídos.
        """
        result = await self.db.execute(
            select(Department)
            .join(UserDepartment, UserDepartment.department_id == Department.id)
            .where(UserDepartment.user_id == user_id)
            .order_by(UserDepartment.id)
        )
        return list(result.scalars().all())

    async def get_users_of_department(self, department_id: int) -> list[User]:
        """Usuários vinculados ao departamento, na ordem dos vínculos."""
        result = await self.db.execute(
            select(User)
            .join(UserDepartment, UserDepartment.user_id == User.id)
            .where(UserDepartment.department_id == department_id)
            .order_by(UserDepartment.id)
        )
        return list(result.scalars().all())
