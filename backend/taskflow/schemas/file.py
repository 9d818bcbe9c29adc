"""
Schemas de Arquivo.
"""

from datetime import datetime

from pydantic import Field

from taskflow.schemas.base import BaseSchema, IDMixin


class FileCreate(BaseSchema):
    """Metadados de um arquivo já gravado no disco."""

    filename: str = Field(..., min_length=1, max_length=255)
    path: str = Field(..., min_length=1)
    size: int = Field(..., ge=0, description="Tamanho em bytes")
    type: str = Field(..., description="MIME type")
    task_id: int | None = None
    contract_id: int | None = None
    company_id: int | None = None
    uploaded_by: int


class FileRead(FileCreate, IDMixin):
    """Registro do arquivo."""

    uploaded: datetime
