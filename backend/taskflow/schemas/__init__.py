"""Schemas Pydantic do TaskFlow."""

from taskflow.schemas.audit_log import AuditLogCreate, AuditLogRead
from taskflow.schemas.base import BaseSchema, IDMixin, TimestampMixin, UpdateSchema
from taskflow.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from taskflow.schemas.contract import (
    ContractCreate,
    ContractFilters,
    ContractRead,
    ContractUpdate,
)
from taskflow.schemas.department import (
    DepartmentCreate,
    DepartmentRead,
    DepartmentUpdate,
    UserDepartmentRead,
)
from taskflow.schemas.file import FileCreate, FileRead
from taskflow.schemas.obligation import (
    CompanyObligationCreate,
    CompanyObligationRead,
    ObligationCreate,
    ObligationRead,
    ObligationUpdate,
)
from taskflow.schemas.report import (
    CompetenceGroup,
    DashboardStats,
    DueDateGroup,
    GroupSummary,
    StatusCount,
    TaskReport,
)
from taskflow.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from taskflow.schemas.task import (
    TaskCommentCreate,
    TaskCommentRead,
    TaskCreate,
    TaskFilters,
    TaskRead,
    TaskUpdate,
)
from taskflow.schemas.user import (
    LoginRequest,
    UserCreate,
    UserRead,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Base
    "BaseSchema",
    "IDMixin",
    "TimestampMixin",
    "UpdateSchema",
    # Usuário
    "UserCreate",
    "UserRegister",
    "UserUpdate",
    "UserRead",
    "UserResponse",
    "LoginRequest",
    # Departamento
    "DepartmentCreate",
    "DepartmentUpdate",
    "DepartmentRead",
    "UserDepartmentRead",
    # Empresa
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyRead",
    # Fornecedor
    "SupplierCreate",
    "SupplierUpdate",
    "SupplierRead",
    # Obrigação
    "ObligationCreate",
    "ObligationUpdate",
    "ObligationRead",
    "CompanyObligationCreate",
    "CompanyObligationRead",
    # Tarefa
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "TaskFilters",
    "TaskCommentCreate",
    "TaskCommentRead",
    # Contrato
    "ContractCreate",
    "ContractUpdate",
    "ContractRead",
    "ContractFilters",
    # Arquivo e Auditoria
    "FileCreate",
    "FileRead",
    "AuditLogCreate",
    "AuditLogRead",
    # Relatórios
    "StatusCount",
    "GroupSummary",
    "DueDateGroup",
    "CompetenceGroup",
    "DashboardStats",
    "TaskReport",
]
