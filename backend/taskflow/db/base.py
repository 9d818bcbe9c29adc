"""
Base class para todos os modelos SQLAlchemy.

Define a identidade inteira sequencial e os campos de timestamp compartilhados.
"""

from datetime import datetime, timezone
from typing import Any, Type

from sqlalchemy import DateTime, Enum as SQLEnum, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    """Instante atual em UTC."""
    return datetime.now(timezone.utc)


def PgEnum(enum_class: Type) -> SQLEnum:
    """
    Cria um SQLAlchemy Enum que usa os valores (values) em vez dos nomes (names).

    Exemplo:
        class TaskStatus(str, enum.Enum):
            IN_PROGRESS = "in_progress"  # Nome: IN_PROGRESS, Valor: in_progress

        # Sem PgEnum: o banco recebe "IN_PROGRESS"
        # Com PgEnum: o banco recebe "in_progress"
    """
    return SQLEnum(enum_class, values_callable=lambda x: [e.value for e in x])


class Base(DeclarativeBase):
    """
    Classe base para todos os modelos.

    O id é um inteiro atribuído pelo banco, monotônico por tabela.
    """

    # Sem AUTOINCREMENT o SQLite reaproveita o maior id após exclusão
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        """Gera nome da tabela automaticamente a partir do nome da classe."""
        # CamelCase -> snake_case
        name = cls.__name__
        return "".join(
            ["_" + c.lower() if c.isupper() else c for c in name]
        ).lstrip("_") + "s"

    def to_dict(self) -> dict[str, Any]:
        """Converte modelo para dicionário."""
        return {
            column.key: getattr(self, column.key)
            for column in self.__mapper__.column_attrs
        }


class TimestampMixin:
    """Campos created/updated atribuídos pelo storage, nunca pelo chamador."""

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
