"""
Modelo de Fornecedor/Prestador.
"""

import enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, PgEnum


class SupplierType(str, enum.Enum):
    """Tipos de fornecedor."""

    CONTRACTOR = "contractor"
    SUPPLIER = "supplier"
    SERVICE_PROVIDER = "service_provider"
    OTHER = "other"


class Supplier(Base):
    """Fornecedor, empreiteiro ou prestador de serviço."""

    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[SupplierType] = mapped_column(PgEnum(SupplierType), nullable=False)
    document: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)

    contact: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id}, name='{self.name}', document='{self.document}')>"
