"""
Modelo do Usuário do sistema.
"""

import enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum


class UserRole(str, enum.Enum):
    """Papéis de usuário no sistema."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    CLIENT = "client"  # Acesso de cliente externo


class User(Base):
    """Usuário do TaskFlow."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Hash da senha; opaco para o storage
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    photo: Mapped[str | None] = mapped_column(String(500))
    position: Mapped[str | None] = mapped_column(String(255))

    role: Mapped[UserRole] = mapped_column(
        PgEnum(UserRole),
        default=UserRole.EMPLOYEE,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role={self.role.value})>"
