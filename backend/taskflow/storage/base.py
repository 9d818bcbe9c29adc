"""
Interface do storage do TaskFlow.

Contrato comum às implementações em memória e relacional:

- leituras por id devolvem None quando o registro não existe (nunca lançam);
- atualizações e exclusões de ids inexistentes devolvem None/False;
- todas as leituras devolvem cópias, nunca o objeto armazenado;
- unicidade e integridade referencial são verificadas pelos services (o
  backend SQL também rejeita duplicatas pelos índices únicos);
- listagens seguem a ordem de inserção, exceto comentários (mais antigos
  primeiro) e auditoria (mais recentes primeiro).
"""

from abc import ABC, abstractmethod

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
from taskflow.storage.sessions import SessionStore

DEFAULT_DEPARTMENTS: list[DepartmentCreate] = [
    DepartmentCreate(name="Contabilidade", description="Departamento de Contabilidade"),
    DepartmentCreate(name="Fiscal", description="Departamento Fiscal"),
    DepartmentCreate(name="Financeiro", description="Departamento Financeiro"),
    DepartmentCreate(name="Compras", description="Departamento de Compras"),
    DepartmentCreate(name="RH", description="Departamento de Recursos Humanos"),
    DepartmentCreate(name="Administrativo", description="Departamento Administrativo"),
    DepartmentCreate(name="Diretoria", description="Diretoria Executiva"),
]


class Storage(ABC):
    """Storage de domínio do TaskFlow."""

    session_store: SessionStore

    async def initialize(self) -> None:
        """Prepara o backend (schema, carga inicial). Nada a fazer por padrão."""

    async def close(self) -> None:
        """Libera recursos do backend."""

    # === Usuários ===

    @abstractmethod
    async def get_user(self, id: int) -> UserRead | None:
        """Busca usuário por ID."""

    @abstractmethod
    async def get_user_by_username(self, username: str) -> UserRead | None:
        """Busca usuário pelo username (comparação exata)."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> UserRead | None:
        """Busca usuário pelo email (comparação exata)."""

    @abstractmethod
    async def create_user(self, data: UserCreate) -> UserRead:
        """Cria usuário. A senha já deve estar em hash."""

    @abstractmethod
    async def update_user(self, id: int, data: UserUpdate) -> UserRead | None:
        """Atualiza usuário parcialmente."""

    @abstractmethod
    async def get_users(self) -> list[UserRead]:
        """Lista todos os usuários."""

    # === Departamentos ===

    @abstractmethod
    async def get_department(self, id: int) -> DepartmentRead | None:
        """Busca departamento por ID."""

    @abstractmethod
    async def get_department_by_name(self, name: str) -> DepartmentRead | None:
        """Busca departamento pelo nome."""

    @abstractmethod
    async def create_department(self, data: DepartmentCreate) -> DepartmentRead:
        """Cria departamento."""

    @abstractmethod
    async def update_department(
        self, id: int, data: DepartmentUpdate
    ) -> DepartmentRead | None:
        """Atualiza departamento parcialmente."""

    @abstractmethod
    async def delete_department(self, id: int) -> bool:
        """Remove departamento sem cascata."""

    @abstractmethod
    async def get_departments(self) -> list[DepartmentRead]:
        """Lista todos os departamentos."""

    # === Usuário x Departamento ===

    @abstractmethod
    async def assign_user_to_department(
        self, user_id: int, department_id: int
    ) -> UserDepartmentRead:
        """Vincula usuário a departamento. Vínculo repetido devolve o existente."""

    @abstractmethod
    async def remove_user_from_department(self, user_id: int, department_id: int) -> bool:
        """Remove o vínculo; False se o par não existe."""

    @abstractmethod
    async def get_user_departments(self, user_id: int) -> list[DepartmentRead]:
        """Departamentos do usuário, ignorando departamentos excluídos."""

    @abstractmethod
    async def get_department_users(self, department_id: int) -> list[UserRead]:
        """Usuários do departamento, ignorando usuários inexistentes."""

    # === Empresas ===

    @abstractmethod
    async def get_company(self, id: int) -> CompanyRead | None:
        """Busca empresa por ID."""

    @abstractmethod
    async def get_company_by_cnpj(self, cnpj: str) -> CompanyRead | None:
        """Busca empresa pelo CNPJ."""

    @abstractmethod
    async def create_company(self, data: CompanyCreate) -> CompanyRead:
        """Cria empresa."""

    @abstractmethod
    async def update_company(self, id: int, data: CompanyUpdate) -> CompanyRead | None:
        """Atualiza empresa parcialmente."""

    @abstractmethod
    async def delete_company(self, id: int) -> bool:
        """Remove empresa sem cascata."""

    @abstractmethod
    async def get_companies(self) -> list[CompanyRead]:
        """Lista todas as empresas."""

    # === Fornecedores ===

    @abstractmethod
    async def get_supplier(self, id: int) -> SupplierRead | None:
        """Busca fornecedor por ID."""

    @abstractmethod
    async def get_supplier_by_document(self, document: str) -> SupplierRead | None:
        """Busca fornecedor pelo documento."""

    @abstractmethod
    async def create_supplier(self, data: SupplierCreate) -> SupplierRead:
        """Cria fornecedor."""

    @abstractmethod
    async def update_supplier(self, id: int, data: SupplierUpdate) -> SupplierRead | None:
        """Atualiza fornecedor; None explícito limpa o campo."""

    @abstractmethod
    async def delete_supplier(self, id: int) -> bool:
        """Remove fornecedor."""

    @abstractmethod
    async def get_suppliers(self) -> list[SupplierRead]:
        """Lista todos os fornecedores."""

    # === Obrigações ===

    @abstractmethod
    async def get_obligation(self, id: int) -> ObligationRead | None:
        """Busca obrigação por ID."""

    @abstractmethod
    async def create_obligation(self, data: ObligationCreate) -> ObligationRead:
        """Cria obrigação."""

    @abstractmethod
    async def update_obligation(
        self, id: int, data: ObligationUpdate
    ) -> ObligationRead | None:
        """Atualiza obrigação parcialmente."""

    @abstractmethod
    async def delete_obligation(self, id: int) -> bool:
        """Remove obrigação sem cascata."""

    @abstractmethod
    async def get_obligations(self) -> list[ObligationRead]:
        """Lista todas as obrigações."""

    # === Empresa x Obrigação ===

    @abstractmethod
    async def assign_obligation_to_company(
        self,
        company_id: int,
        obligation_id: int,
        responsible_id: int | None = None,
    ) -> CompanyObligationRead:
        """
        Vincula obrigação a empresa.

        Se o par já existe, devolve o vínculo existente; um responsible_id
        informado substitui o responsável atual.
        """

    @abstractmethod
    async def remove_obligation_from_company(self, company_id: int, obligation_id: int) -> bool:
        """Remove o vínculo; False se o par não existe."""

    @abstractmethod
    async def get_company_obligations(self, company_id: int) -> list[ObligationRead]:
        """Obrigações da empresa, ignorando obrigações excluídas."""

    # === Tarefas ===

    @abstractmethod
    async def get_task(self, id: int) -> TaskRead | None:
        """Busca tarefa por ID."""

    @abstractmethod
    async def create_task(self, data: TaskCreate) -> TaskRead:
        """Cria tarefa, atribuindo created/updated."""

    @abstractmethod
    async def update_task(self, id: int, data: TaskUpdate) -> TaskRead | None:
        """Atualiza tarefa parcialmente e renova updated."""

    @abstractmethod
    async def delete_task(self, id: int) -> bool:
        """Remove tarefa."""

    @abstractmethod
    async def get_tasks(self) -> list[TaskRead]:
        """Lista todas as tarefas."""

    @abstractmethod
    async def get_tasks_by_company(self, company_id: int) -> list[TaskRead]:
        """Tarefas de uma empresa."""

    @abstractmethod
    async def get_tasks_by_department(self, department_id: int) -> list[TaskRead]:
        """Tarefas de um departamento."""

    @abstractmethod
    async def get_tasks_by_responsible(self, responsible_id: int) -> list[TaskRead]:
        """Tarefas de um responsável."""

    @abstractmethod
    async def get_tasks_by_status(self, status: TaskStatus | str) -> list[TaskRead]:
        """Tarefas com o status informado."""

    @abstractmethod
    async def get_tasks_due_today(self) -> list[TaskRead]:
        """Tarefas cuja data de vencimento é hoje."""

    @abstractmethod
    async def get_tasks_overdue(self) -> list[TaskRead]:
        """
        Tarefas vencidas: vencimento anterior a hoje e status diferente de
        completed. O status armazenado não é alterado.
        """

    # === Comentários ===

    @abstractmethod
    async def add_task_comment(self, task_id: int, user_id: int, comment: str) -> TaskCommentRead:
        """Adiciona comentário com timestamp do servidor."""

    @abstractmethod
    async def get_task_comments(self, task_id: int) -> list[TaskCommentRead]:
        """Comentários da tarefa, do mais antigo para o mais recente."""

    # === Contratos ===

    @abstractmethod
    async def get_contract(self, id: int) -> ContractRead | None:
        """Busca contrato por ID."""

    @abstractmethod
    async def create_contract(self, data: ContractCreate) -> ContractRead:
        """Cria contrato, atribuindo created/updated."""

    @abstractmethod
    async def update_contract(self, id: int, data: ContractUpdate) -> ContractRead | None:
        """Atualiza contrato parcialmente e renova updated."""

    @abstractmethod
    async def delete_contract(self, id: int) -> bool:
        """Remove contrato."""

    @abstractmethod
    async def get_contracts(self) -> list[ContractRead]:
        """Lista todos os contratos."""

    @abstractmethod
    async def get_contracts_by_company(self, company_id: int) -> list[ContractRead]:
        """Contratos de uma empresa."""

    @abstractmethod
    async def get_contracts_by_responsible(self, responsible_id: int) -> list[ContractRead]:
        """Contratos de um responsável."""

    @abstractmethod
    async def get_contracts_by_status(self, status: ContractStatus | str) -> list[ContractRead]:
        """Contratos com o status informado."""

    # === Arquivos ===

    @abstractmethod
    async def save_file(self, data: FileCreate) -> FileRead:
        """Registra metadados de arquivo, atribuindo uploaded."""

    @abstractmethod
    async def get_file(self, id: int) -> FileRead | None:
        """Busca arquivo por ID."""

    @abstractmethod
    async def get_task_files(self, task_id: int) -> list[FileRead]:
        """Arquivos de uma tarefa."""

    @abstractmethod
    async def get_contract_files(self, contract_id: int) -> list[FileRead]:
        """Arquivos de um contrato."""

    @abstractmethod
    async def get_company_files(self, company_id: int) -> list[FileRead]:
        """Arquivos de uma empresa."""

    @abstractmethod
    async def delete_file(self, id: int) -> bool:
        """Remove os metadados do arquivo."""

    # === Auditoria ===

    @abstractmethod
    async def add_audit_log(
        self,
        user_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str | None = None,
    ) -> AuditLogRead:
        """Registra entrada de auditoria com timestamp do servidor."""

    @abstractmethod
    async def get_audit_logs(self) -> list[AuditLogRead]:
        """Todo o log de auditoria, mais recentes primeiro."""

    @abstractmethod
    async def get_entity_audit_logs(self, entity_type: str, entity_id: int) -> list[AuditLogRead]:
        """Auditoria de uma entidade, mais recentes primeiro."""

    @abstractmethod
    async def get_user_audit_logs(self, user_id: int) -> list[AuditLogRead]:
        """Auditoria das ações de um usuário, mais recentes primeiro."""
