"""
Modelo da Empresa cliente.
"""

import enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum


class TaxRegime(str, enum.Enum):
    """Regimes tributários."""

    SIMPLES = "simples"  # Simples Nacional
    PRESUMIDO = "presumido"  # Lucro Presumido
    REAL = "real"  # Lucro Real
    SCP = "scp"  # Sociedade em Conta de Participação


class Company(Base):
    """Empresa atendida."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[str] = mapped_column(String(18), unique=True, nullable=False, index=True)
    tax_regime: Mapped[TaxRegime] = mapped_column(PgEnum(TaxRegime), nullable=False)

    # Contato
    address: Mapped[str | None] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str | None] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}', cnpj='{self.cnpj}')>"
