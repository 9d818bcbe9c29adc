"""
Modelos de Tarefa e Comentário de tarefa.

Competência (mês/ano) identifica o período a que a tarefa se refere e é
independente da data de vencimento.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum, TimestampMixin, utcnow
from taskflow.models.obligation import Recurrence


class TaskStatus(str, enum.Enum):
    """Status da tarefa."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLIENT_PENDING = "client_pending"  # Aguardando o cliente
    OVERDUE = "overdue"


class Task(TimestampMixin, Base):
    """Tarefa com vencimento e competência."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    competence_month: Mapped[int] = mapped_column(Integer, nullable=False)
    competence_year: Mapped[int] = mapped_column(Integer, nullable=False)

    recurrence: Mapped[Recurrence] = mapped_column(
        PgEnum(Recurrence),
        default=Recurrence.NONE,
        nullable=False,
    )
    status: Mapped[TaskStatus] = mapped_column(
        PgEnum(TaskStatus),
        default=TaskStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Referências sem FK: o storage não garante integridade referencial
    company_id: Mapped[int | None] = mapped_column(Integer, index=True)
    department_id: Mapped[int | None] = mapped_column(Integer, index=True)
    responsible_id: Mapped[int | None] = mapped_column(Integer, index=True)
    contract_id: Mapped[int | None] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title='{self.title}', status={self.status.value})>"


class TaskComment(Base):
    """Comentário de tarefa. Apenas inserção."""

    __tablename__ = "task_comments"

    task_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
