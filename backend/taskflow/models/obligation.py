"""
Modelos de Obrigação acessória e do vínculo Empresa-Obrigação.
"""

import enum

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum


class Recurrence(str, enum.Enum):
    """Periodicidade de obrigações e tarefas."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"


class Obligation(Base):
    """
    Obrigação recorrente (ex.: DCTF, EFD-Reinf).

    É um modelo independente de empresa; o vínculo fica em CompanyObligation.
    """

    __tablename__ = "obligations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False)
    recurrence: Mapped[Recurrence] = mapped_column(PgEnum(Recurrence), nullable=False)

    def __repr__(self) -> str:
        return f"<Obligation(id={self.id}, name='{self.name}', due_day={self.due_day})>"


class CompanyObligation(Base):
    """Obrigação que uma empresa deve cumprir, com responsável opcional."""

    __tablename__ = "company_obligations"
    __table_args__ = (
        UniqueConstraint("company_id", "obligation_id", name="uq_company_obligation"),
        {"sqlite_autoincrement": True},
    )

    company_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    obligation_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    responsible_id: Mapped[int | None] = mapped_column(Integer)
