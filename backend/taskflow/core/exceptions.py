"""
Exceções customizadas da aplicação.

O storage não lança exceções para condições esperadas (registro ausente,
duplicidade): elas são sinalizadas por valor de retorno. Estas exceções são
usadas pela camada de serviços, que traduz ausências e conflitos em erros
com código e status HTTP equivalente.
"""

from typing import Any


class TaskFlowException(Exception):
    """Exceção base do TaskFlow."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "TASKFLOW_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# === Exceções de Autenticação ===

class AuthenticationError(TaskFlowException):
    """Erro de autenticação."""

    status_code = 401

    def __init__(self, message: str = "Credenciais inválidas"):
        super().__init__(message, code="AUTH_ERROR")


class SessionExpiredError(AuthenticationError):
    """Sessão inexistente ou expirada."""

    def __init__(self):
        super().__init__("Não autenticado")
        self.code = "SESSION_EXPIRED"


# === Exceções de Autorização ===

class AuthorizationError(TaskFlowException):
    """Erro de autorização/permissão."""

    status_code = 403

    def __init__(self, message: str = "Acesso proibido"):
        super().__init__(message, code="AUTHORIZATION_ERROR")


class InsufficientPermissionsError(AuthorizationError):
    """Usuário não tem permissão para a ação."""

    def __init__(self, action: str):
        super().__init__(f"Permissão insuficiente para: {action}")
        self.code = "INSUFFICIENT_PERMISSIONS"
        self.action = action


# === Exceções de Recursos ===

class ResourceNotFoundError(TaskFlowException):
    """Recurso não encontrado."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: int | str | None = None,
    ):
        message = f"{resource_type} não encontrado"
        if resource_id is not None:
            message = f"{resource_type} com ID {resource_id} não encontrado"
        super().__init__(message, code="NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceAlreadyExistsError(TaskFlowException):
    """Recurso já existe (violação de unicidade)."""

    status_code = 400

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: str,
    ):
        message = f"{resource_type} com {field}='{value}' já existe"
        super().__init__(message, code="ALREADY_EXISTS")
        self.resource_type = resource_type
        self.field = field
        self.value = value


# === Exceções de Validação ===

class ValidationError(TaskFlowException):
    """Erro de validação de dados."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.errors = errors or []


class FileTooLargeError(ValidationError):
    """Arquivo muito grande."""

    def __init__(self, max_size_mb: int, actual_size_mb: float):
        super().__init__(
            f"Arquivo muito grande. Máximo: {max_size_mb}MB, enviado: {actual_size_mb:.2f}MB",
            field="size",
        )
        self.code = "FILE_TOO_LARGE"


# === Exceções de Storage ===

class StorageError(TaskFlowException):
    """Falha inesperada do backend de armazenamento."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, code="STORAGE_ERROR")
        self.operation = operation


class AuditWriteError(StorageError):
    """Falha ao gravar log de auditoria. Nunca interrompe a operação principal."""

    def __init__(self, action: str, entity_type: str):
        super().__init__(
            f"Falha ao registrar auditoria: {action} {entity_type}",
            operation="audit",
        )
        self.code = "AUDIT_WRITE_ERROR"
