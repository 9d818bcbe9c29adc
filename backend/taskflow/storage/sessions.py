"""
Armazenamento de sessões de login.

O storage expõe apenas um handle genérico; a semântica da sessão (o que é
guardado, quando expira) pertence ao serviço de autenticação.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger()


class SessionStore(ABC):
    """Interface de persistência de sessões."""

    @abstractmethod
    def get(self, session_id: str) -> dict[str, Any] | None:
        """Dados da sessão, ou None se inexistente ou expirada."""

    @abstractmethod
    def set(self, session_id: str, data: dict[str, Any], ttl: float | None = None) -> None:
        """Grava a sessão com validade em segundos."""

    @abstractmethod
    def touch(self, session_id: str) -> bool:
        """Renova a validade da sessão; False se ela não existe."""

    @abstractmethod
    def destroy(self, session_id: str) -> bool:
        """Remove a sessão; False se ela não existe."""


class MemorySessionStore(SessionStore):
    """
    Sessões em memória com expiração.

    Entradas expiradas são descartadas ao serem lidas e, no máximo uma vez a
    cada `check_period` segundos, por uma varredura completa.
    """

    def __init__(
        self,
        ttl: float = 60 * 60 * 24,
        check_period: float = 60 * 60 * 24,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl
        self._check_period = check_period
        self._clock = clock
        # session_id -> (expira_em, ttl, dados)
        self._sessions: dict[str, tuple[float, float, dict[str, Any]]] = {}
        self._last_prune = clock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> dict[str, Any] | None:
        self._maybe_prune()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        expires_at, _, data = entry
        if expires_at <= self._clock():
            del self._sessions[session_id]
            return None
        return dict(data)

    def set(self, session_id: str, data: dict[str, Any], ttl: float | None = None) -> None:
        self._maybe_prune()
        ttl = ttl if ttl is not None else self._ttl
        self._sessions[session_id] = (self._clock() + ttl, ttl, dict(data))

    def touch(self, session_id: str) -> bool:
        """Renova a sessão pelo mesmo ttl com que foi gravada."""
        data = self.get(session_id)
        if data is None:
            return False
        _, ttl, _ = self._sessions[session_id]
        self.set(session_id, data, ttl=ttl)
        return True

    def destroy(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def prune(self) -> int:
        """Remove todas as sessões expiradas. Retorna quantas foram removidas."""
        now = self._clock()
        expired = [sid for sid, (expires_at, _, _) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        self._last_prune = now
        if expired:
            logger.debug("Sessões expiradas removidas", total=len(expired))
        return len(expired)

    def _maybe_prune(self) -> None:
        if self._clock() - self._last_prune >= self._check_period:
            self.prune()
