"""Services - Business Logic Layer."""

from taskflow.services.audit import AuditService
from taskflow.services.auth_service import AuthService
from taskflow.services.company_service import CompanyService
from taskflow.services.contract_service import ContractService
from taskflow.services.department_service import DepartmentService
from taskflow.services.file_service import FileService
from taskflow.services.obligation_service import ObligationService
from taskflow.services.report_service import ReportService
from taskflow.services.supplier_service import SupplierService
from taskflow.services.task_service import TaskService
from taskflow.services.user_service import UserService

__all__ = [
    "AuditService",
    "AuthService",
    "UserService",
    "DepartmentService",
    "CompanyService",
    "SupplierService",
    "ObligationService",
    "TaskService",
    "ContractService",
    "FileService",
    "ReportService",
]
