"""
Armazenamento local dos arquivos enviados.

O storage de domínio guarda apenas os metadados; o conteúdo fica em disco,
sob `UPLOAD_DIR`.
"""

import uuid
from pathlib import Path

import structlog

from taskflow.core.config import Settings
from taskflow.core.exceptions import FileTooLargeError, StorageError

logger = structlog.get_logger()


class UploadStorage:
    """
    Gravação de uploads em diretório local.

    Uso:
        uploads = UploadStorage.from_settings(settings)
        path, size = uploads.save(conteudo, "balancete.pdf")
    """

    def __init__(self, upload_dir: str | Path, max_size_mb: int = 10):
        self.upload_dir = Path(upload_dir)
        self.max_size_mb = max_size_mb

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadStorage":
        return cls(settings.UPLOAD_DIR, settings.MAX_UPLOAD_SIZE_MB)

    def _validate_file(self, file_size: int) -> None:
        """Valida tamanho antes de gravar."""
        max_size_bytes = self.max_size_mb * 1024 * 1024
        if file_size > max_size_bytes:
            raise FileTooLargeError(
                max_size_mb=self.max_size_mb,
                actual_size_mb=file_size / (1024 * 1024),
            )

    def _generate_path(self, original_filename: str) -> Path:
        """
        Gera caminho único no diretório de uploads.

        Formato: {upload_dir}/{uuid}_{filename}
        """
        file_uuid = str(uuid.uuid4())[:8]
        safe_filename = Path(original_filename).name  # Remove path traversal
        return self.upload_dir / f"{file_uuid}_{safe_filename}"

    def save(self, content: bytes, original_filename: str) -> tuple[str, int]:
        """
        Grava o conteúdo em disco.

        Returns:
            Tupla (caminho gravado, tamanho em bytes)
        """
        self._validate_file(len(content))
        path = self._generate_path(original_filename)

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error("Erro ao gravar upload", error=str(e), path=str(path))
            raise StorageError(f"Erro ao gravar arquivo: {e}", operation="upload") from e

        logger.info("Arquivo gravado", path=str(path), size_bytes=len(content))
        return str(path), len(content)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def delete(self, path: str) -> bool:
        """Remove o arquivo do disco. False se ele já não existia."""
        file_path = Path(path)
        if not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as e:
            logger.error("Erro ao remover upload", error=str(e), path=path)
            raise StorageError(f"Erro ao remover arquivo: {e}", operation="delete") from e
        return True
