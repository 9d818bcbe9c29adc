"""
Schemas de Contrato.
"""

from datetime import date

from pydantic import Field, field_validator

from taskflow.models.contract import ContractStatus, ContractType
from taskflow.schemas.base import BaseSchema, IDMixin, TimestampMixin, UpdateSchema, to_date


class ContractBase(BaseSchema):
    """Campos base do contrato."""

    number: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    contract_type: ContractType
    start_date: date
    end_date: date
    value: str = Field(..., min_length=1, description="Valor formatado pelo chamador")
    adjustment_info: str | None = None
    status: ContractStatus = ContractStatus.ACTIVE
    company_id: int
    responsible_id: int | None = None
    department_id: int | None = None
    file_path: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def drop_time(cls, v):
        return to_date(v)


class ContractCreate(ContractBase):
    """Schema para criação de contrato."""


class ContractUpdate(UpdateSchema):
    """Schema para atualização parcial de contrato."""

    required_fields = frozenset({
        "number", "title", "contract_type", "start_date", "end_date",
        "value", "status", "company_id",
    })

    number: str | None = Field(None, min_length=1, max_length=100)
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    contract_type: ContractType | None = None
    start_date: date | None = None
    end_date: date | None = None
    value: str | None = Field(None, min_length=1)
    adjustment_info: str | None = None
    status: ContractStatus | None = None
    company_id: int | None = None
    responsible_id: int | None = None
    department_id: int | None = None
    file_path: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def drop_time(cls, v):
        return to_date(v)


class ContractRead(ContractBase, IDMixin, TimestampMixin):
    """Registro do contrato."""


class ContractFilters(BaseSchema):
    """Filtros de listagem de contratos (precedência: empresa, responsável, status)."""

    company_id: int | None = None
    responsible_id: int | None = None
    status: ContractStatus | None = None
