"""
Schemas de Departamento e do vínculo Usuário-Departamento.
"""

from pydantic import Field

from taskflow.schemas.base import BaseSchema, IDMixin, UpdateSchema


class DepartmentBase(BaseSchema):
    """Campos base do departamento."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class DepartmentCreate(DepartmentBase):
    """Schema para criação de departamento."""


class DepartmentUpdate(UpdateSchema):
    """Schema para atualização parcial de departamento."""

    required_fields = frozenset({"name"})

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class DepartmentRead(DepartmentBase, IDMixin):
    """Registro do departamento."""


class UserDepartmentRead(BaseSchema, IDMixin):
    """Vínculo entre usuário e departamento."""

    user_id: int
    department_id: int
