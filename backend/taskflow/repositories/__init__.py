"""Repositories - Data Access Layer."""

from taskflow.repositories.audit_log_repository import AuditLogRepository
from taskflow.repositories.base import BaseRepository
from taskflow.repositories.company_repository import CompanyRepository
from taskflow.repositories.contract_repository import ContractRepository
from taskflow.repositories.department_repository import (
    DepartmentRepository,
    UserDepartmentRepository,
)
from taskflow.repositories.file_repository import FileRepository
from taskflow.repositories.obligation_repository import (
    CompanyObligationRepository,
    ObligationRepository,
)
from taskflow.repositories.supplier_repository import SupplierRepository
from taskflow.repositories.task_repository import TaskCommentRepository, TaskRepository
from taskflow.repositories.user_repository import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Entidades
    "UserRepository",
    "DepartmentRepository",
    "UserDepartmentRepository",
    "CompanyRepository",
    "SupplierRepository",
    "ObligationRepository",
    "CompanyObligationRepository",
    "TaskRepository",
    "TaskCommentRepository",
    "ContractRepository",
    "FileRepository",
    "AuditLogRepository",
]
