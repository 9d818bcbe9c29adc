"""
Implementação em memória do storage.

Cada entidade fica em uma `Table`: dicionário ordenado por id com contador
próprio. Os registros guardados são schemas Pydantic e toda leitura devolve
uma cópia, então alterar o objeto retornado não altera o estado interno.
"""

import itertools
import threading
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel

from taskflow.core.config import Settings
from taskflow.db.base import utcnow
from taskflow.models.contract import ContractStatus
from taskflow.models.task import TaskStatus
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

RecordType = TypeVar("RecordType", bound=BaseModel)


class Table(Generic[RecordType]):
    """
    Coleção de registros de uma entidade.

    Uso:
        tasks = Table(TaskRead, created_fields=("created", "updated"), updated_fields=("updated",))
        task = tasks.insert(dados.model_dump())
    """

    def __init__(
        self,
        record_type: type[RecordType],
        created_fields: Iterable[str] = (),
        updated_fields: Iterable[str] = (),
    ):
        self.record_type = record_type
        self._created_fields = tuple(created_fields)
        self._updated_fields = tuple(updated_fields)
        self._rows: dict[int, RecordType] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rows)

    def insert(self, data: dict[str, Any]) -> RecordType:
        """Atribui id e timestamps, guarda e devolve o registro."""
        now = utcnow()
        with self._lock:
            id = next(self._ids)
            record = self.record_type.model_validate(
                {**data, "id": id, **dict.fromkeys(self._created_fields, now)}
            )
            self._rows[id] = record
        return record.model_copy()

    def get(self, id: int) -> RecordType | None:
        record = self._rows.get(id)
        return record.model_copy() if record is not None else None

    def all(self) -> list[RecordType]:
        return [record.model_copy() for record in self._rows.values()]

    def filter(self, predicate: Callable[[RecordType], bool]) -> list[RecordType]:
        return [record.model_copy() for record in self._rows.values() if predicate(record)]

    def first(self, predicate: Callable[[RecordType], bool]) -> RecordType | None:
        for record in self._rows.values():
            if predicate(record):
                return record.model_copy()
        return None

    def update(self, id: int, changes: dict[str, Any]) -> RecordType | None:
        """Mescla `changes` no registro e renova os campos de atualização."""
        with self._lock:
            existing = self._rows.get(id)
            if existing is None:
                return None

            now = utcnow()
            record = self.record_type.model_validate(
                {
                    **existing.model_dump(),
                    **changes,
                    "id": id,
                    **dict.fromkeys(self._updated_fields, now),
                }
            )
            self._rows[id] = record
        return record.model_copy()

    def delete(self, id: int) -> bool:
        with self._lock:
            return self._rows.pop(id, None) is not None


def newest_first(records: list[RecordType], field: str) -> list[RecordType]:
    """Ordena por timestamp decrescente, desempatando pelo id."""
    return sorted(records, key=lambda r: (getattr(r, field), r.id), reverse=True)


class MemoryStorage(Storage):
    """
    Storage em memória (implementação de referência).

    Uso:
        storage = MemoryStorage()
        company = await storage.create_company(CompanyCreate(...))
    """

    def __init__(
        self,
        seed_default_departments: bool = True,
        session_store: SessionStore | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._users = Table(UserRead)
        self._departments = Table(DepartmentRead)
        self._user_departments = Table(UserDepartmentRead)
        self._companies = Table(CompanyRead)
        self._suppliers = Table(SupplierRead)
        self._obligations = Table(ObligationRead)
        self._company_obligations = Table(CompanyObligationRead)
        self._tasks = Table(TaskRead, created_fields=("created", "updated"), updated_fields=("updated",))
        self._task_comments = Table(TaskCommentRead, created_fields=("created",))
        self._contracts = Table(
            ContractRead, created_fields=("created", "updated"), updated_fields=("updated",)
        )
        self._files = Table(FileRead, created_fields=("uploaded",))
        self._audit_logs = Table(AuditLogRead, created_fields=("timestamp",))

        self._today = today
        self.session_store = session_store or MemorySessionStore()

        if seed_default_departments:
            for department in DEFAULT_DEPARTMENTS:
                self._departments.insert(department.model_dump())

        logger.debug("Storage em memória inicializado", departments=len(self._departments))

    @classmethod
    def from_settings(cls, settings: Settings) -> "MemoryStorage":
        return cls(
            seed_default_departments=settings.SEED_DEFAULT_DEPARTMENTS,
            session_store=MemorySessionStore(
                ttl=settings.SESSION_TTL_SECONDS,
                check_period=settings.SESSION_CHECK_PERIOD_SECONDS,
            ),
        )

    # === Usuários ===

    async def get_user(self, id: int) -> UserRead | None:
        return self._users.get(id)

    async def get_user_by_username(self, username: str) -> UserRead | None:
        return self._users.first(lambda u: u.username == username)

    async def get_user_by_email(self, email: str) -> UserRead | None:
        return self._users.first(lambda u: u.email == email)

    async def create_user(self, data: UserCreate) -> UserRead:
        return self._users.insert(data.model_dump())

    async def update_user(self, id: int, data: UserUpdate) -> UserRead | None:
        return self._users.update(id, data.changes())

    async def get_users(self) -> list[UserRead]:
        return self._users.all()

    # === Departamentos ===

    async def get_department(self, id: int) -> DepartmentRead | None:
        return self._departments.get(id)

    async def get_department_by_name(self, name: str) -> DepartmentRead | None:
        return self._departments.first(lambda d: d.name == name)

    async def create_department(self, data: DepartmentCreate) -> DepartmentRead:
        return self._departments.insert(data.model_dump())

    async def update_department(
        self, id: int, data: DepartmentUpdate
    ) -> DepartmentRead | None:
        return self._departments.update(id, data.changes())

    async def delete_department(self, id: int) -> bool:
        return self._departments.delete(id)

    async def get_departments(self) -> list[DepartmentRead]:
        return self._departments.all()

    # === Usuário x Departamento ===

    async def assign_user_to_department(
        self, user_id: int, department_id: int
    ) -> UserDepartmentRead:
        existing = self._user_departments.first(
            lambda ud: ud.user_id == user_id and ud.department_id == department_id
        )
        if existing is not None:
            return existing
        return self._user_departments.insert(
            {"user_id": user_id, "department_id": department_id}
        )

    async def remove_user_from_department(self, user_id: int, department_id: int) -> bool:
        link = self._user_departments.first(
            lambda ud: ud.user_id == user_id and ud.department_id == department_id
        )
        if link is None:
            return False
        return self._user_departments.delete(link.id)

    async def get_user_departments(self, user_id: int) -> list[DepartmentRead]:
        links = self._user_departments.filter(lambda ud: ud.user_id == user_id)
        departments = (self._departments.get(link.department_id) for link in links)
        return [d for d in departments if d is not None]

    async def get_department_users(self, department_id: int) -> list[UserRead]:
        links = self._user_departments.filter(lambda ud: ud.department_id == department_id)
        users = (self._users.get(link.user_id) for link in links)
        return [u for u in users if u is not None]

    # === Empresas ===

    async def get_company(self, id: int) -> CompanyRead | None:
        return self._companies.get(id)

    async def get_company_by_cnpj(self, cnpj: str) -> CompanyRead | None:
        return self._companies.first(lambda c: c.cnpj == cnpj)

    async def create_company(self, data: CompanyCreate) -> CompanyRead:
        return self._companies.insert(data.model_dump())

    async def update_company(self, id: int, data: CompanyUpdate) -> CompanyRead | None:
        return self._companies.update(id, data.changes())

    async def delete_company(self, id: int) -> bool:
        return self._companies.delete(id)

    async def get_companies(self) -> list[CompanyRead]:
        return self._companies.all()

    # === Fornecedores ===

    async def get_supplier(self, id: int) -> SupplierRead | None:
        return self._suppliers.get(id)

    async def get_supplier_by_document(self, document: str) -> SupplierRead | None:
        return self._suppliers.first(lambda s: s.document == document)

    async def create_supplier(self, data: SupplierCreate) -> SupplierRead:
        return self._suppliers.insert(data.model_dump())

    async def update_supplier(self, id: int, data: SupplierUpdate) -> SupplierRead | None:
        return self._suppliers.update(id, data.changes())

    async def delete_supplier(self, id: int) -> bool:
        return self._suppliers.delete(id)

    async def get_suppliers(self) -> list[SupplierRead]:
        return self._suppliers.all()

    # === Obrigações ===

    async def get_obligation(self, id: int) -> ObligationRead | None:
        return self._obligations.get(id)

    async def create_obligation(self, data: ObligationCreate) -> ObligationRead:
        return self._obligations.insert(data.model_dump())

    async def update_obligation(
        self, id: int, data: ObligationUpdate
    ) -> ObligationRead | None:
        return self._obligations.update(id, data.changes())

    async def delete_obligation(self, id: int) -> bool:
        return self._obligations.delete(id)

    async def get_obligations(self) -> list[ObligationRead]:
        return self._obligations.all()

    # === Empresa x Obrigação ===

    async def assign_obligation_to_company(
        self,
        company_id: int,
        obligation_id: int,
        responsible_id: int | None = None,
    ) -> CompanyObligationRead:
        existing = self._company_obligations.first(
            lambda co: co.company_id == company_id and co.obligation_id == obligation_id
        )
        if existing is None:
            return self._company_obligations.insert(
                {
                    "company_id": company_id,
                    "obligation_id": obligation_id,
                    "responsible_id": responsible_id,
                }
            )
        if responsible_id is not None and responsible_id != existing.responsible_id:
            return self._company_obligations.update(
                existing.id, {"responsible_id": responsible_id}
            )
        return existing

    async def remove_obligation_from_company(self, company_id: int, obligation_id: int) -> bool:
        link = self._company_obligations.first(
            lambda co: co.company_id == company_id and co.obligation_id == obligation_id
        )
        if link is None:
            return False
        return self._company_obligations.delete(link.id)

    async def get_company_obligations(self, company_id: int) -> list[ObligationRead]:
        links = self._company_obligations.filter(lambda co: co.company_id == company_id)
        obligations = (self._obligations.get(link.obligation_id) for link in links)
        return [o for o in obligations if o is not None]

    # === Tarefas ===

    async def get_task(self, id: int) -> TaskRead | None:
        return self._tasks.get(id)

    async def create_task(self, data: TaskCreate) -> TaskRead:
        return self._tasks.insert(data.model_dump())

    async def update_task(self, id: int, data: TaskUpdate) -> TaskRead | None:
        return self._tasks.update(id, data.changes())

    async def delete_task(self, id: int) -> bool:
        return self._tasks.delete(id)

    async def get_tasks(self) -> list[TaskRead]:
        return self._tasks.all()

    async def get_tasks_by_company(self, company_id: int) -> list[TaskRead]:
        return self._tasks.filter(lambda t: t.company_id == company_id)

    async def get_tasks_by_department(self, department_id: int) -> list[TaskRead]:
        return self._tasks.filter(lambda t: t.department_id == department_id)

    async def get_tasks_by_responsible(self, responsible_id: int) -> list[TaskRead]:
        return self._tasks.filter(lambda t: t.responsible_id == responsible_id)

    async def get_tasks_by_status(self, status: TaskStatus | str) -> list[TaskRead]:
        return self._tasks.filter(lambda t: t.status == status)

    async def get_tasks_due_today(self) -> list[TaskRead]:
        today = self._today()
        return self._tasks.filter(lambda t: t.due_date == today)

    async def get_tasks_overdue(self) -> list[TaskRead]:
        today = self._today()
        return self._tasks.filter(
            lambda t: t.due_date < today and t.status != TaskStatus.COMPLETED
        )

    # === Comentários ===

    async def add_task_comment(self, task_id: int, user_id: int, comment: str) -> TaskCommentRead:
        return self._task_comments.insert(
            {"task_id": task_id, "user_id": user_id, "comment": comment}
        )

    async def get_task_comments(self, task_id: int) -> list[TaskCommentRead]:
        comments = self._task_comments.filter(lambda c: c.task_id == task_id)
        return sorted(comments, key=lambda c: (c.created, c.id))

    # === Contratos ===

    async def get_contract(self, id: int) -> ContractRead | None:
        return self._contracts.get(id)

    async def create_contract(self, data: ContractCreate) -> ContractRead:
        return self._contracts.insert(data.model_dump())

    async def update_contract(self, id: int, data: ContractUpdate) -> ContractRead | None:
        return self._contracts.update(id, data.changes())

    async def delete_contract(self, id: int) -> bool:
        return self._contracts.delete(id)

    async def get_contracts(self) -> list[ContractRead]:
        return self._contracts.all()

    async def get_contracts_by_company(self, company_id: int) -> list[ContractRead]:
        return self._contracts.filter(lambda c: c.company_id == company_id)

    async def get_contracts_by_responsible(self, responsible_id: int) -> list[ContractRead]:
        return self._contracts.filter(lambda c: c.responsible_id == responsible_id)

    async def get_contracts_by_status(self, status: ContractStatus | str) -> list[ContractRead]:
        return self._contracts.filter(lambda c: c.status == status)

    # === Arquivos ===

    async def save_file(self, data: FileCreate) -> FileRead:
        return self._files.insert(data.model_dump())

    async def get_file(self, id: int) -> FileRead | None:
        return self._files.get(id)

    async def get_task_files(self, task_id: int) -> list[FileRead]:
        return self._files.filter(lambda f: f.task_id == task_id)

    async def get_contract_files(self, contract_id: int) -> list[FileRead]:
        return self._files.filter(lambda f: f.contract_id == contract_id)

    async def get_company_files(self, company_id: int) -> list[FileRead]:
        return self._files.filter(lambda f: f.company_id == company_id)

    async def delete_file(self, id: int) -> bool:
        return self._files.delete(id)

    # === Auditoria ===

    async def add_audit_log(
        self,
        user_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str | None = None,
    ) -> AuditLogRead:
        return self._audit_logs.insert(
            {
                "user_id": user_id,
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "details": details,
            }
        )

    async def get_audit_logs(self) -> list[AuditLogRead]:
        return newest_first(self._audit_logs.all(), "timestamp")

    async def get_entity_audit_logs(self, entity_type: str, entity_id: int) -> list[AuditLogRead]:
        logs = self._audit_logs.filter(
            lambda log: log.entity_type == entity_type and log.entity_id == entity_id
        )
        return newest_first(logs, "timestamp")

    async def get_user_audit_logs(self, user_id: int) -> list[AuditLogRead]:
        return newest_first(self._audit_logs.filter(lambda log: log.user_id == user_id), "timestamp")
