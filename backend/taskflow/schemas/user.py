"""
Schemas do Usuário.
"""

from pydantic import EmailStr, Field

from taskflow.models.user import UserRole
from taskflow.schemas.base import BaseSchema, IDMixin, UpdateSchema


class UserBase(BaseSchema):
    """Campos base do usuário."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    photo: str | None = None
    position: str | None = None
    role: UserRole = UserRole.EMPLOYEE


class UserCreate(UserBase):
    """
    Schema para criação de usuário no storage.

    `password` já deve chegar como hash; o storage não o interpreta.
    """

    password: str = Field(..., min_length=1)


class UserRegister(UserBase):
    """Schema de cadastro com senha em texto plano e departamento opcional."""

    password: str = Field(..., min_length=1, description="Senha do usuário")
    department_id: int | None = None


class UserUpdate(UpdateSchema):
    """Schema para atualização parcial de usuário."""

    required_fields = frozenset({"username", "email", "password", "name", "role"})

    username: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1)
    name: str | None = Field(None, min_length=1, max_length=255)
    photo: str | None = None
    position: str | None = None
    role: UserRole | None = None


class UserRead(UserBase, IDMixin):
    """Registro completo do usuário, incluindo o hash da senha."""

    password: str


class UserResponse(UserBase, IDMixin):
    """Usuário sem dados de credencial, seguro para exposição."""


class LoginRequest(BaseSchema):
    """Schema de login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
