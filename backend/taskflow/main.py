"""
Ponto de entrada do TaskFlow.

Monta o storage configurado e os services que operam sobre ele, e gerencia
o ciclo de vida (logging, schema do banco, conexões).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog

from taskflow.core.config import Settings, settings as default_settings
from taskflow.core.logging import setup_logging
from taskflow.core.uploads import UploadStorage
from taskflow.services import (
    AuditService,
    AuthService,
    CompanyService,
    ContractService,
    DepartmentService,
    FileService,
    ObligationService,
    ReportService,
    SupplierService,
    TaskService,
    UserService,
)
from taskflow.storage import Storage, create_storage

logger = structlog.get_logger()


@dataclass
class TaskFlow:
    """Storage e services compartilhando a mesma instância de auditoria."""

    settings: Settings
    storage: Storage
    audit: AuditService
    auth: AuthService
    users: UserService
    departments: DepartmentService
    companies: CompanyService
    suppliers: SupplierService
    obligations: ObligationService
    tasks: TaskService
    contracts: ContractService
    files: FileService
    reports: ReportService


def create_application(
    settings: Settings | None = None,
    storage: Storage | None = None,
) -> TaskFlow:
    """Factory que liga os services ao storage (sem inicializá-lo)."""
    settings = settings or default_settings
    storage = storage or create_storage(settings)
    audit = AuditService(storage)

    return TaskFlow(
        settings=settings,
        storage=storage,
        audit=audit,
        auth=AuthService(storage, audit, settings),
        users=UserService(storage, audit),
        departments=DepartmentService(storage, audit),
        companies=CompanyService(storage, audit),
        suppliers=SupplierService(storage, audit),
        obligations=ObligationService(storage, audit),
        tasks=TaskService(storage, audit),
        contracts=ContractService(storage, audit),
        files=FileService(storage, audit, UploadStorage.from_settings(settings)),
        reports=ReportService(storage, upcoming_days=settings.UPCOMING_DEADLINE_DAYS),
    )


@asynccontextmanager
async def lifespan(
    settings: Settings | None = None,
    storage: Storage | None = None,
) -> AsyncGenerator[TaskFlow, None]:
    """
    Gerencia o ciclo de vida da aplicação.

    Uso:
        async with lifespan() as app:
            session_id, user = await app.auth.login("maria", "senha")
    """
    settings = settings or default_settings

    # Startup
    setup_logging(settings)
    app = create_application(settings, storage)
    await app.storage.initialize()
    logger.info("Iniciando aplicação", version=settings.VERSION)

    try:
        yield app
    finally:
        # Shutdown
        await app.storage.close()
        logger.info("Encerrando aplicação")
