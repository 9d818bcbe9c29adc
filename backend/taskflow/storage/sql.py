"""
Implementação relacional do storage (SQLAlchemy assíncrono).

Cada operação abre sua própria sessão e faz um único commit. Os modelos ORM
nunca saem daqui: toda leitura é convertida para o schema Pydantic de leitura.
Ao contrário da versão em memória, os índices únicos do banco rejeitam
duplicidades, e a violação chega ao chamador como ResourceAlreadyExistsError.
"""

import enum
from collections.abc import Callable, Iterable
from datetime import date
from typing import TypeVar

import structlog
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from taskflow.core.config import Settings
from taskflow.db.base import Base
from taskflow.db.session import create_engine, create_session_maker
from taskflow.models.contract import ContractStatus
from taskflow.models.task import TaskStatus
from taskflow.repositories import (
    AuditLogRepository,
    CompanyObligationRepository,
    CompanyRepository,
    ContractRepository,
    DepartmentRepository,
    FileRepository,
    ObligationRepository,
    SupplierRepository,
    TaskCommentRepository,
    TaskRepository,
    UserDepartmentRepository,
    UserRepository,
)
from taskflow.schemas.audit_log import AuditLogRead
from taskflow.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from taskflow.schemas.contract import ContractCreate, ContractRead, ContractUpdate
from taskflow.schemas.department import (
    DepartmentCreate,
    DepartmentRead,
    DepartmentUpdate,
    UserDepartmentRead,
)
from taskflow.schemas.file import FileCreate, FileRead
from taskflow.schemas.obligation import (
    CompanyObligationRead,
    ObligationCreate,
    ObligationRead,
    ObligationUpdate,
)
from taskflow.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from taskflow.schemas.task import TaskCommentRead, TaskCreate, TaskRead, TaskUpdate
from taskflow.schemas.user import UserCreate, UserRead, UserUpdate
from taskflow.storage.base import DEFAULT_DEPARTMENTS, Storage
from taskflow.storage.sessions import MemorySessionStore, SessionStore

logger = structlog.get_logger()

SchemaType = TypeVar("SchemaType", bound=BaseModel)
EnumType = TypeVar("EnumType", bound=enum.Enum)


def _read(schema: type[SchemaType], instance: Base | None) -> SchemaType | None:
    return schema.model_validate(instance) if instance is not None else None


def _read_all(schema: type[SchemaType], instances: Iterable[Base]) -> list[SchemaType]:
    return [schema.model_validate(instance) for instance in instances]


def _coerce(enum_class: type[EnumType], value: EnumType | str) -> EnumType | None:
    """Converte para o enum; valores desconhecidos não casam com nenhum registro."""
    try:
        return enum_class(value)
    except ValueError:
        return None


class SqlStorage(Storage):
    """
    Storage sobre PostgreSQL (asyncpg) ou SQLite (aiosqlite).

    Uso:
        storage = SqlStorage.from_settings(settings)
        await storage.initialize()
        ...
        await storage.close()
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
        seed_default_departments: bool = True,
        session_store: SessionStore | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._session_maker = session_maker
        self._engine = engine
        self._seed_default_departments = seed_default_departments
        self._today = today
        self.session_store = session_store or MemorySessionStore()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlStorage":
        engine = create_engine(settings)
        return cls(
            create_session_maker(engine),
            engine=engine,
            seed_default_departments=settings.SEED_DEFAULT_DEPARTMENTS,
            session_store=MemorySessionStore(
                ttl=settings.SESSION_TTL_SECONDS,
                check_period=settings.SESSION_CHECK_PERIOD_SECONDS,
            ),
        )

    async def initialize(self) -> None:
        """Cria as tabelas e, com a tabela vazia, os departamentos padrão."""
        if self._engine is not None:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        if not self._seed_default_departments:
            return

        async with self._session_maker() as db:
            repo = DepartmentRepository(db)
            if await repo.count() > 0:
                return
            for department in DEFAULT_DEPARTMENTS:
                await repo.create(**department.model_dump())

        logger.debug("Departamentos padrão criados", total=len(DEFAULT_DEPARTMENTS))

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    # === Usuários ===

    async def get_user(self, id: int) -> UserRead | None:
        async with self._session_maker() as db:
            return _read(UserRead, await UserRepository(db).get_by_id(id))

    async def get_user_by_username(self, username: str) -> UserRead | None:
        async with self._session_maker() as db:
            return _read(UserRead, await UserRepository(db).get_by_username(username))

    async def get_user_by_email(self, email: str) -> UserRead | None:
        async with self._session_maker() as db:
            return _read(UserRead, await UserRepository(db).get_by_email(email))

    async def create_user(self, data: UserCreate) -> UserRead:
        async with self._session_maker() as db:
            return UserRead.model_validate(await UserRepository(db).create(**data.model_dump()))

    async def update_user(self, id: int, data: UserUpdate) -> UserRead | None:
        async with self._session_maker() as db:
            return _read(UserRead, await UserRepository(db).update(id, **data.changes()))

    async def get_users(self) -> list[UserRead]:
        async with self._session_maker() as db:
            return _read_all(UserRead, await UserRepository(db).get_all())

    # === Departamentos ===

    async def get_department(self, id: int) -> DepartmentRead | None:
        async with self._session_maker() as db:
            return _read(DepartmentRead, await DepartmentRepository(db).get_by_id(id))

    async def get_department_by_name(self, name: str) -> DepartmentRead | None:
        async with self._session_maker() as db:
            return _read(DepartmentRead, await DepartmentRepository(db).get_by_name(name))

    async def create_department(self, data: DepartmentCreate) -> DepartmentRead:
        async with self._session_maker() as db:
            department = await DepartmentRepository(db).create(**data.model_dump())
            return DepartmentRead.model_validate(department)

    async def update_department(
        self, id: int, data: DepartmentUpdate
    ) -> DepartmentRead | None:
        async with self._session_maker() as db:
            return _read(DepartmentRead, await DepartmentRepository(db).update(id, **data.changes()))

    async def delete_department(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await DepartmentRepository(db).delete(id)

    async def get_departments(self) -> list[DepartmentRead]:
        async with self._session_maker() as db:
            return _read_all(DepartmentRead, await DepartmentRepository(db).get_all())

    # === Usuário x Departamento ===

    async def assign_user_to_department(
        self, user_id: int, department_id: int
    ) -> UserDepartmentRead:
        async with self._session_maker() as db:
            repo = UserDepartmentRepository(db)
            link = await repo.get_link(user_id, department_id)
            if link is None:
                link = await repo.create(user_id=user_id, department_id=department_id)
            return UserDepartmentRead.model_validate(link)

    async def remove_user_from_department(self, user_id: int, department_id: int) -> bool:
        async with self._session_maker() as db:
            repo = UserDepartmentRepository(db)
            link = await repo.get_link(user_id, department_id)
            if link is None:
                return False
            return await repo.delete(link.id)

    async def get_user_departments(self, user_id: int) -> list[DepartmentRead]:
        async with self._session_maker() as db:
            departments = await UserDepartmentRepository(db).get_departments_of_user(user_id)
            return _read_all(DepartmentRead, departments)

    async def get_department_users(self, department_id: int) -> list[UserRead]:
        async with self._session_maker() as db:
            users = await UserDepartmentRepository(db).get_users_of_department(department_id)
            return _read_all(UserRead, users)

    # === Empresas ===

    async def get_company(self, id: int) -> CompanyRead | None:
        async with self._session_maker() as db:
            return _read(CompanyRead, await CompanyRepository(db).get_by_id(id))

    async def get_company_by_cnpj(self, cnpj: str) -> CompanyRead | None:
        async with self._session_maker() as db:
            return _read(CompanyRead, await CompanyRepository(db).get_by_cnpj(cnpj))

    async def create_company(self, data: CompanyCreate) -> CompanyRead:
        async with self._session_maker() as db:
            company = await CompanyRepository(db).create(**data.model_dump())
            return CompanyRead.model_validate(company)

    async def update_company(self, id: int, data: CompanyUpdate) -> CompanyRead | None:
        async with self._session_maker() as db:
            return _read(CompanyRead, await CompanyRepository(db).update(id, **data.changes()))

    async def delete_company(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await CompanyRepository(db).delete(id)

    async def get_companies(self) -> list[CompanyRead]:
        async with self._session_maker() as db:
            return _read_all(CompanyRead, await CompanyRepository(db).get_all())

    # === Fornecedores ===

    async def get_supplier(self, id: int) -> SupplierRead | None:
        async with self._session_maker() as db:
            return _read(SupplierRead, await SupplierRepository(db).get_by_id(id))

    async def get_supplier_by_document(self, document: str) -> SupplierRead | None:
        async with self._session_maker() as db:
            return _read(SupplierRead, await SupplierRepository(db).get_by_document(document))

    async def create_supplier(self, data: SupplierCreate) -> SupplierRead:
        async with self._session_maker() as db:
            supplier = await SupplierRepository(db).create(**data.model_dump())
            return SupplierRead.model_validate(supplier)

    async def update_supplier(self, id: int, data: SupplierUpdate) -> SupplierRead | None:
        async with self._session_maker() as db:
            return _read(SupplierRead, await SupplierRepository(db).update(id, **data.changes()))

    async def delete_supplier(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await SupplierRepository(db).delete(id)

    async def get_suppliers(self) -> list[SupplierRead]:
        async with self._session_maker() as db:
            return _read_all(SupplierRead, await SupplierRepository(db).get_all())

    # === Obrigações ===

    async def get_obligation(self, id: int) -> ObligationRead | None:
        async with self._session_maker() as db:
            return _read(ObligationRead, await ObligationRepository(db).get_by_id(id))

    async def create_obligation(self, data: ObligationCreate) -> ObligationRead:
        async with self._session_maker() as db:
            obligation = await ObligationRepository(db).create(**data.model_dump())
            return ObligationRead.model_validate(obligation)

    async def update_obligation(
        self, id: int, data: ObligationUpdate
    ) -> ObligationRead | None:
        async with self._session_maker() as db:
            return _read(ObligationRead, await ObligationRepository(db).update(id, **data.changes()))

    async def delete_obligation(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await ObligationRepository(db).delete(id)

    async def get_obligations(self) -> list[ObligationRead]:
        async with self._session_maker() as db:
            return _read_all(ObligationRead, await ObligationRepository(db).get_all())

    # === Empresa x Obrigação ===

    async def assign_obligation_to_company(
        self,
        company_id: int,
        obligation_id: int,
        responsible_id: int | None = None,
    ) -> CompanyObligationRead:
        async with self._session_maker() as db:
            repo = CompanyObligationRepository(db)
            link = await repo.get_link(company_id, obligation_id)
            if link is None:
                link = await repo.create(
                    company_id=company_id,
                    obligation_id=obligation_id,
                    responsible_id=responsible_id,
                )
            elif responsible_id is not None and responsible_id != link.responsible_id:
                link = await repo.update(link.id, responsible_id=responsible_id)
            return CompanyObligationRead.model_validate(link)

    async def remove_obligation_from_company(self, company_id: int, obligation_id: int) -> bool:
        async with self._session_maker() as db:
            repo = CompanyObligationRepository(db)
            link = await repo.get_link(company_id, obligation_id)
            if link is None:
                return False
            return await repo.delete(link.id)

    async def get_company_obligations(self, company_id: int) -> list[ObligationRead]:
        async with self._session_maker() as db:
            obligations = await CompanyObligationRepository(db).get_obligations_of_company(company_id)
            return _read_all(ObligationRead, obligations)

    # === Tarefas ===

    async def get_task(self, id: int) -> TaskRead | None:
        async with self._session_maker() as db:
            return _read(TaskRead, await TaskRepository(db).get_by_id(id))

    async def create_task(self, data: TaskCreate) -> TaskRead:
        async with self._session_maker() as db:
            return TaskRead.model_validate(await TaskRepository(db).create(**data.model_dump()))

    async def update_task(self, id: int, data: TaskUpdate) -> TaskRead | None:
        async with self._session_maker() as db:
            return _read(TaskRead, await TaskRepository(db).update(id, **data.changes()))

    async def delete_task(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await TaskRepository(db).delete(id)

    async def get_tasks(self) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_all())

    async def get_tasks_by_company(self, company_id: int) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_by_company(company_id))

    async def get_tasks_by_department(self, department_id: int) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_by_department(department_id))

    async def get_tasks_by_responsible(self, responsible_id: int) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_by_responsible(responsible_id))

    async def get_tasks_by_status(self, status: TaskStatus | str) -> list[TaskRead]:
        status = _coerce(TaskStatus, status)
        if status is None:
            return []
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_by_status(status))

    async def get_tasks_due_today(self) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_due_on(self._today()))

    async def get_tasks_overdue(self) -> list[TaskRead]:
        async with self._session_maker() as db:
            return _read_all(TaskRead, await TaskRepository(db).get_overdue(self._today()))

    # === Comentários ===

    async def add_task_comment(self, task_id: int, user_id: int, comment: str) -> TaskCommentRead:
        async with self._session_maker() as db:
            task_comment = await TaskCommentRepository(db).create(
                task_id=task_id, user_id=user_id, comment=comment
            )
            return TaskCommentRead.model_validate(task_comment)

    async def get_task_comments(self, task_id: int) -> list[TaskCommentRead]:
        async with self._session_maker() as db:
            return _read_all(TaskCommentRead, await TaskCommentRepository(db).get_by_task(task_id))

    # === Contratos ===

    async def get_contract(self, id: int) -> ContractRead | None:
        async with self._session_maker() as db:
            return _read(ContractRead, await ContractRepository(db).get_by_id(id))

    async def create_contract(self, data: ContractCreate) -> ContractRead:
        async with self._session_maker() as db:
            contract = await ContractRepository(db).create(**data.model_dump())
            return ContractRead.model_validate(contract)

    async def update_contract(self, id: int, data: ContractUpdate) -> ContractRead | None:
        async with self._session_maker() as db:
            return _read(ContractRead, await ContractRepository(db).update(id, **data.changes()))

    async def delete_contract(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await ContractRepository(db).delete(id)

    async def get_contracts(self) -> list[ContractRead]:
        async with self._session_maker() as db:
            return _read_all(ContractRead, await ContractRepository(db).get_all())

    async def get_contracts_by_company(self, company_id: int) -> list[ContractRead]:
        async with self._session_maker() as db:
            return _read_all(ContractRead, await ContractRepository(db).get_by_company(company_id))

    async def get_contracts_by_responsible(self, responsible_id: int) -> list[ContractRead]:
        async with self._session_maker() as db:
            contracts = await ContractRepository(db).get_by_responsible(responsible_id)
            return _read_all(ContractRead, contracts)

    async def get_contracts_by_status(self, status: ContractStatus | str) -> list[ContractRead]:
        status = _coerce(ContractStatus, status)
        if status is None:
            return []
        async with self._session_maker() as db:
            return _read_all(ContractRead, await ContractRepository(db).get_by_status(status))

    # === Arquivos ===

    async def save_file(self, data: FileCreate) -> FileRead:
        async with self._session_maker() as db:
            return FileRead.model_validate(await FileRepository(db).create(**data.model_dump()))

    async def get_file(self, id: int) -> FileRead | None:
        async with self._session_maker() as db:
            return _read(FileRead, await FileRepository(db).get_by_id(id))

    async def get_task_files(self, task_id: int) -> list[FileRead]:
        async with self._session_maker() as db:
            return _read_all(FileRead, await FileRepository(db).get_by_task(task_id))

    async def get_contract_files(self, contract_id: int) -> list[FileRead]:
        async with self._session_maker() as db:
            return _read_all(FileRead, await FileRepository(db).get_by_contract(contract_id))

    async def get_company_files(self, company_id: int) -> list[FileRead]:
        async with self._session_maker() as db:
            return _read_all(FileRead, await FileRepository(db).get_by_company(company_id))

    async def delete_file(self, id: int) -> bool:
        async with self._session_maker() as db:
            return await FileRepository(db).delete(id)

    # === Auditoria ===

    async def add_audit_log(
        self,
        user_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str | None = None,
    ) -> AuditLogRead:
        async with self._session_maker() as db:
            log = await AuditLogRepository(db).create(
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                details=details,
            )
            return AuditLogRead.model_validate(log)

    async def get_audit_logs(self) -> list[AuditLogRead]:
        async with self._session_maker() as db:
            return _read_all(AuditLogRead, await AuditLogRepository(db).get_newest_first())

    async def get_entity_audit_logs(self, entity_type: str, entity_id: int) -> list[AuditLogRead]:
        async with self._session_maker() as db:
            logs = await AuditLogRepository(db).get_by_entity(entity_type, entity_id)
            return _read_all(AuditLogRead, logs)

    async def get_user_audit_logs(self, user_id: int) -> list[AuditLogRead]:
        async with self._session_maker() as db:
            return _read_all(AuditLogRead, await AuditLogRepository(db).get_by_user(user_id))
