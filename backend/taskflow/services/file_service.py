"""
Service de Arquivos.

Grava o conteúdo via UploadStorage e os metadados no storage de domínio.
"""

import structlog

from taskflow.core.exceptions import ResourceNotFoundError, ValidationError
from taskflow.core.uploads import UploadStorage
from taskflow.schemas.file import FileCreate, FileRead
from taskflow.schemas.user import UserRead
from taskflow.services.audit import AuditService
from taskflow.services.base import ensure_found
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class FileService:
    """Service para upload e consulta de arquivos anexados."""

    def __init__(self, storage: Storage, audit: AuditService, uploads: UploadStorage):
        self._storage = storage
        self._audit = audit
        self._uploads = uploads

    async def upload(
        self,
        actor: UserRead,
        filename: str,
        content: bytes,
        content_type: str,
        task_id: int | None = None,
        contract_id: int | None = None,
        company_id: int | None = None,
    ) -> FileRead:
        """
        Envia arquivo vinculado a tarefa, contrato e/ou empresa.

        Ao menos um vínculo é obrigatório e todos os informados devem existir.
        """
        if task_id is None and contract_id is None and company_id is None:
            raise ValidationError("Especifique tarefa, contrato ou empresa")

        if task_id is not None:
            ensure_found(await self._storage.get_task(task_id), "Tarefa", task_id)
        if contract_id is not None:
            ensure_found(await self._storage.get_contract(contract_id), "Contrato", contract_id)
        if company_id is not None:
            ensure_found(await self._storage.get_company(company_id), "Empresa", company_id)

        path, size = self._uploads.save(content, filename)

        try:
            file = await self._storage.save_file(
                FileCreate(
                    filename=filename,
                    path=path,
                    size=size,
                    type=content_type,
                    task_id=task_id,
                    contract_id=contract_id,
                    company_id=company_id,
                    uploaded_by=actor.id,
                )
            )
        except Exception as e:
            # Sem metadados o conteúdo ficaria inacessível em disco
            logger.error("Erro ao registrar arquivo", error=str(e), path=path)
            self._uploads.delete(path)
            raise
        await self._audit.record(
            actor.id, "uploaded", "file", file.id, f"Arquivo {file.filename} enviado"
        )
        logger.info("Arquivo registrado", file_id=file.id, size_bytes=size)
        return file

    async def get(self, file_id: int) -> FileRead:
        return ensure_found(await self._storage.get_file(file_id), "Arquivo", file_id)

    async def get_path(self, file_id: int) -> str:
        """Caminho do conteúdo em disco, para download."""
        file = await self.get(file_id)
        if not self._uploads.exists(file.path):
            raise ResourceNotFoundError("Arquivo no servidor", file_id)
        return file.path

    async def list_files(
        self,
        task_id: int | None = None,
        contract_id: int | None = None,
        company_id: int | None = None,
    ) -> list[FileRead]:
        """Lista arquivos; precedência: tarefa, contrato, empresa."""
        if task_id is not None:
            return await self._storage.get_task_files(task_id)
        if contract_id is not None:
            return await self._storage.get_contract_files(contract_id)
        if company_id is not None:
            return await self._storage.get_company_files(company_id)
        raise ValidationError("Especifique tarefa, contrato ou empresa")

    async def delete(self, actor: UserRead, file_id: int) -> None:
        file = await self.get(file_id)
        await self._storage.delete_file(file_id)
        self._uploads.delete(file.path)
        await self._audit.record(
            actor.id, "deleted", "file", file_id, f"Arquivo {file.filename} excluído"
        )
