"""
Modelo de Arquivo anexado.

Apenas metadados; o conteúdo fica no sistema de arquivos (campo path).
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base, utcnow


class File(Base):
    """Metadados de um arquivo enviado."""

    __tablename__ = "files"

    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)  # MIME type

    # Ao menos um vínculo é esperado por convenção (validado no serviço)
    task_id: Mapped[int | None] = mapped_column(Integer, index=True)
    contract_id: Mapped[int | None] = mapped_column(Integer, index=True)
    company_id: Mapped[int | None] = mapped_column(Integer, index=True)

    uploaded_by: Mapped[int] = mapped_column(Integer, nullable=False)
    uploaded: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<File(id={self.id}, filename='{self.filename}')>"
