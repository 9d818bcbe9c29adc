"""
Storage de domínio do TaskFlow.

Uso:
    storage = create_storage(settings)
    await storage.initialize()
"""

from taskflow.core.config import Settings
from taskflow.storage.base import DEFAULT_DEPARTMENTS, Storage
from taskflow.storage.memory import MemoryStorage
from taskflow.storage.sessions import MemorySessionStore, SessionStore
from taskflow.storage.sql import SqlStorage


def create_storage(settings: Settings) -> Storage:
    """Instancia o backend configurado em STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "sql":
        return SqlStorage.from_settings(settings)
    return MemoryStorage.from_settings(settings)


__all__ = [
    "DEFAULT_DEPARTMENTS",
    "Storage",
    "MemoryStorage",
    "SqlStorage",
    "SessionStore",
    "MemorySessionStore",
    "create_storage",
]
