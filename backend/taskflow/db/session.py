"""
Configuração da sessão de banco de dados assíncrona.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from taskflow.core.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine assíncrona para a DATABASE_URL configurada."""
    url = settings.DATABASE_URL
    kwargs: dict = {"echo": settings.DATABASE_ECHO}

    # SQLite em memória só existe dentro de uma conexão: compartilhamos a mesma
    if url.startswith("sqlite") and (":memory:" in url or url.endswith("://")):
        kwargs.update(
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(url, **kwargs)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory ligada à engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
