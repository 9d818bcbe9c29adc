"""
Modelo de Contrato.
"""

import enum
from datetime import date

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum, TimestampMixin


class ContractType(str, enum.Enum):
    """Tipos de contrato."""

    SERVICE = "service"
    SUPPLY = "supply"
    LEASE = "lease"
    OTHER = "other"


class ContractStatus(str, enum.Enum):
    """Status do contrato."""

    ACTIVE = "active"
    RENEWED = "renewed"
    EXPIRED = "expired"
    TERMINATED = "terminated"


class Contract(TimestampMixin, Base):
    """Contrato vinculado a uma empresa."""

    __tablename__ = "contracts"

    number: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    contract_type: Mapped[ContractType] = mapped_column(PgEnum(ContractType), nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Valor já formatado (ex.: "R$ 1.500,00"); a formatação é do chamador
    value: Mapped[str] = mapped_column(String(100), nullable=False)
    adjustment_info: Mapped[str | None] = mapped_column(Text)

    status: Mapped[ContractStatus] = mapped_column(
        PgEnum(ContractStatus),
        default=ContractStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    company_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    responsible_id: Mapped[int | None] = mapped_column(Integer, index=True)
    department_id: Mapped[int | None] = mapped_column(Integer)
    file_path: Mapped[str | None] = mapped_column(String(500))

    def __repr__(self) -> str:
        return f"<Contract(id={self.id}, number='{self.number}', status={self.status.value})>"
