"""
Schemas do Fornecedor.
"""

from pydantic import Field

from taskflow.models.supplier import SupplierType
from taskflow.schemas.base import BaseSchema, IDMixin, UpdateSchema


class SupplierBase(BaseSchema):
    """Campos base do fornecedor."""

    name: str = Field(..., min_length=1, max_length=255)
    type: SupplierType
    document: str = Field(..., min_length=1, max_length=20, description="CPF ou CNPJ")
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None


class SupplierCreate(SupplierBase):
    """Schema para criação de fornecedor."""


class SupplierUpdate(UpdateSchema):
    """
    Schema para atualização parcial de fornecedor.

    Contato, telefone, email, endereço e observações enviados como None são
    apagados; omitidos são mantidos.
    """

    required_fields = frozenset({"name", "type", "document"})

    name: str | None = Field(None, min_length=1, max_length=255)
    type: SupplierType | None = None
    document: str | None = Field(None, min_length=1, max_length=20)
    contact: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None


class SupplierRead(SupplierBase, IDMixin):
    """Registro do fornecedor."""
