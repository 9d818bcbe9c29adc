"""
Pytest fixtures para testes do TaskFlow.
"""
from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio

from taskflow.core.config import Settings
from taskflow.core.uploads import UploadStorage
from taskflow.db.session import create_engine, create_session_maker
from taskflow.models.company import TaxRegime
from taskflow.models.user import UserRole
from taskflow.schemas.company import CompanyCreate
from taskflow.schemas.user import UserCreate, UserRead
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
from taskflow.storage import MemoryStorage, SqlStorage, Storage

# Data fixa usada como "hoje" pelas consultas de vencimento
TODAY = date(2024, 6, 15)

TEST_SETTINGS = Settings(
    STORAGE_BACKEND="sql",
    DATABASE_URL="sqlite://",
    SESSION_TTL_SECONDS=60,
    MAX_UPLOAD_SIZE_MB=1,
)


def today() -> date:
    return TODAY


@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request) -> AsyncGenerator[Storage, None]:
    """Storage de cada backend, com departamentos padrão e data fixa."""
    if request.param == "memory":
        backend = MemoryStorage(today=today)
    else:
        # SQLite em memória: o schema é criado a cada teste
        engine = create_engine(TEST_SETTINGS)
        backend = SqlStorage(create_session_maker(engine), engine=engine, today=today)

    await backend.initialize()
    yield backend
    await backend.close()


@pytest_asyncio.fixture
async def memory_storage() -> MemoryStorage:
    """Storage em memória, sem os departamentos padrão."""
    return MemoryStorage(seed_default_departments=False, today=today)


async def make_user(
    storage: Storage,
    username: str,
    role: UserRole = UserRole.EMPLOYEE,
    password: str = "hash-nao-verificado",
) -> UserRead:
    """Cria usuário direto no storage (a senha não é verificada)."""
    return await storage.create_user(
        UserCreate(
            username=username,
            email=f"{username}@taskflow.com.br",
            name=username.capitalize(),
            password=password,
            role=role,
        )
    )


async def make_company(storage: Storage, name: str = "Acme", cnpj: str = "11.111.111/0001-11"):
    return await storage.create_company(
        CompanyCreate(name=name, cnpj=cnpj, tax_regime=TaxRegime.SIMPLES)
    )


@pytest_asyncio.fixture
async def admin(storage: Storage) -> UserRead:
    return await make_user(storage, "admin", UserRole.ADMIN)


@pytest_asyncio.fixture
async def manager(storage: Storage) -> UserRead:
    return await make_user(storage, "gerente", UserRole.MANAGER)


@pytest_asyncio.fixture
async def employee(storage: Storage) -> UserRead:
    return await make_user(storage, "joana", UserRole.EMPLOYEE)


@pytest.fixture
def audit(storage: Storage) -> AuditService:
    return AuditService(storage)


@pytest.fixture
def user_service(storage: Storage, audit: AuditService) -> UserService:
    return UserService(storage, audit)


@pytest.fixture
def department_service(storage: Storage, audit: AuditService) -> DepartmentService:
    return DepartmentService(storage, audit)


@pytest.fixture
def company_service(storage: Storage, audit: AuditService) -> CompanyService:
    return CompanyService(storage, audit)


@pytest.fixture
def supplier_service(storage: Storage, audit: AuditService) -> SupplierService:
    return SupplierService(storage, audit)


@pytest.fixture
def obligation_service(storage: Storage, audit: AuditService) -> ObligationService:
    return ObligationService(storage, audit)


@pytest.fixture
def task_service(storage: Storage, audit: AuditService) -> TaskService:
    return TaskService(storage, audit)


@pytest.fixture
def contract_service(storage: Storage, audit: AuditService) -> ContractService:
    return ContractService(storage, audit)


@pytest.fixture
def file_service(storage: Storage, audit: AuditService, tmp_path) -> FileService:
    return FileService(storage, audit, UploadStorage(tmp_path / "uploads", max_size_mb=1))


@pytest.fixture
def report_service(storage: Storage) -> ReportService:
    return ReportService(storage, upcoming_days=7, today=today)


@pytest.fixture
def auth_service(storage: Storage, audit: AuditService) -> AuthService:
    return AuthService(storage, audit, TEST_SETTINGS)
