"""
Modelos de Departamento e do vínculo Usuário-Departamento.
"""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base


class Department(Base):
    """Departamento da empresa (Fiscal, RH, ...)."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name='{self.name}')>"


class UserDepartment(Base):
    """
    Vínculo muitos-para-muitos entre usuários e departamentos.

    Sem cascade: excluir um departamento deixa vínculos órfãos, que as
    consultas de relacionamento ignoram.
    """

    __tablename__ = "user_departments"
    __table_args__ = (
        UniqueConstraint("user_id", "department_id", name="uq_user_department"),
        {"sqlite_autoincrement": True},
    )

    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    department_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
