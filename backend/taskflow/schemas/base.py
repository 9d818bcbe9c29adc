"""
Schemas base compartilhados.
"""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class BaseSchema(BaseModel):
    """Schema base com configurações padrão."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class IDMixin(BaseModel):
    """Mixin com campo ID."""

    id: int


class TimestampMixin(BaseModel):
    """Mixin com campos de timestamp atribuídos pelo storage."""

    created: datetime
    updated: datetime


class UpdateSchema(BaseSchema):
    """
    Base para atualizações parciais.

    Campos omitidos mantêm o valor atual; campos enviados explicitamente como
    None limpam o valor. Campos obrigatórios da entidade, listados em
    `required_fields`, não aceitam None.
    """

    required_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required(self) -> "UpdateSchema":
        for field in self.model_fields_set & self.required_fields:
            if getattr(self, field) is None:
                raise ValueError(f"{field} não pode ser nulo")
        return self

    def changes(self) -> dict[str, Any]:
        """Campos efetivamente enviados, prontos para mesclar no registro."""
        return self.model_dump(exclude_unset=True)


def to_date(value: Any) -> Any:
    """Descarta o horário de datetimes usados em campos de data."""
    if isinstance(value, datetime):
        return value.date()
    return value
