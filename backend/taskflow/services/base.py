"""
Utilidades compartilhadas pelos services.
"""

from typing import TypeVar

from taskflow.core.exceptions import ResourceNotFoundError

RecordType = TypeVar("RecordType")


def ensure_found(record: RecordType | None, resource_type: str, resource_id: int) -> RecordType:
    """
    Converte a ausência sinalizada pelo storage em ResourceNotFoundError.

    Raises:
        ResourceNotFoundError: se `record` é None
    """
    if record is None:
        raise ResourceNotFoundError(resource_type, resource_id)
    return record
