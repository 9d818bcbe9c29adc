"""
Schemas da Empresa.
"""

from pydantic import Field

from taskflow.models.company import TaxRegime
from taskflow.schemas.base import BaseSchema, IDMixin, UpdateSchema


class CompanyBase(BaseSchema):
    """Campos base da empresa."""

    name: str = Field(..., min_length=1, max_length=255)
    cnpj: str = Field(..., min_length=1, max_length=18)
    tax_regime: TaxRegime
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class CompanyCreate(CompanyBase):
    """Schema para criação de empresa."""


class CompanyUpdate(UpdateSchema):
    """Schema para atualização parcial de empresa."""

    required_fields = frozenset({"name", "cnpj", "tax_regime"})

    name: str | None = Field(None, min_length=1, max_length=255)
    cnpj: str | None = Field(None, min_length=1, max_length=18)
    tax_regime: TaxRegime | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class CompanyRead(CompanyBase, IDMixin):
    """Registro da empresa."""
