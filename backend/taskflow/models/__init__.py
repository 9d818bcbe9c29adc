"""
Modelos SQLAlchemy do TaskFlow.

Importa todos os modelos para garantir que são registrados no metadata.
"""

from taskflow.models.audit_log import AuditLog
from taskflow.models.company import Company, TaxRegime
from taskflow.models.contract import Contract, ContractStatus, ContractType
from taskflow.models.department import Department, UserDepartment
from taskflow.models.file import File
from taskflow.models.obligation import CompanyObligation, Obligation, Recurrence
from taskflow.models.supplier import Supplier, SupplierType
from taskflow.models.task import Task, TaskComment, TaskStatus
from taskflow.models.user import User, UserRole

__all__ = [
    # Usuário e Departamento
    "User",
    "UserRole",
    "Department",
    "UserDepartment",
    # Empresa e Fornecedor
    "Company",
    "TaxRegime",
    "Supplier",
    "SupplierType",
    # Obrigações
    "Obligation",
    "CompanyObligation",
    "Recurrence",
    # Tarefas
    "Task",
    "TaskComment",
    "TaskStatus",
    # Contratos
    "Contract",
    "ContractType",
    "ContractStatus",
    # Arquivos e Auditoria
    "File",
    "AuditLog",
]
