"""
Service de Autenticação.

Cadastro, login e logout com sessões mantidas no `session_store` do storage.
O storage nunca vê a senha em texto plano: apenas o hash gerado em
`taskflow.core.security`.
"""

import structlog

from taskflow.core.config import Settings, settings as default_settings
from taskflow.core.exceptions import (
    AuthenticationError,
    ResourceAlreadyExistsError,
    SessionExpiredError,
)
from taskflow.core.security import generate_session_id, get_password_hash, verify_password
from taskflow.schemas.user import UserCreate, UserRead, UserRegister, UserResponse
from taskflow.services.audit import AuditService
from taskflow.services.user_service import to_response
from taskflow.storage.base import Storage

logger = structlog.get_logger()


class AuthService:
    """
    Service de autenticação local.

    Uso:
        auth = AuthService(storage, audit)
        session_id, user = await auth.login("maria", "senha")
        atual = await auth.current_user(session_id)
    """

    def __init__(
        self,
        storage: Storage,
        audit: AuditService,
        settings: Settings | None = None,
    ):
        self._storage = storage
        self._audit = audit
        self._settings = settings or default_settings

    async def register(self, data: UserRegister) -> UserResponse:
        """
        Cadastra usuário.

        Username e email devem ser únicos. Se `department_id` for informado,
        o usuário é vinculado ao departamento; uma falha nesse vínculo é
        registrada no log e não impede o cadastro.
        """
        if await self._storage.get_user_by_username(data.username) is not None:
            raise ResourceAlreadyExistsError("Usuário", "username", data.username)
        if await self._storage.get_user_by_email(data.email) is not None:
            raise ResourceAlreadyExistsError("Usuário", "email", data.email)

        user = await self._storage.create_user(
            UserCreate(
                **data.model_dump(exclude={"password", "department_id"}),
                password=get_password_hash(data.password),
            )
        )
        await self._audit.record(user.id, "created", "user", user.id, f"Usuário {user.username} cadastrado")

        if data.department_id is not None:
            await self._assign_department(user, data.department_id)

        logger.info("Usuário cadastrado", user_id=user.id, username=user.username)
        return to_response(user)

    async def _assign_department(self, user: UserRead, department_id: int) -> None:
        department = await self._storage.get_department(department_id)
        if department is None:
            logger.warning(
                "Departamento do cadastro não encontrado",
                user_id=user.id,
                department_id=department_id,
            )
            return

        link = await self._storage.assign_user_to_department(user.id, department_id)
        await self._audit.record(
            user.id, "assigned", "user_department", link.id,
            f"Usuário {user.username} vinculado ao departamento {department.name}",
        )

    async def login(self, username: str, password: str) -> tuple[str, UserResponse]:
        """
        Autentica usuário e abre sessão.

        Returns:
            Tupla (session_id, usuário)

        Raises:
            AuthenticationError: usuário inexistente ou senha incorreta
        """
        user = await self._storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.warning("Tentativa de login inválida", username=username)
            raise AuthenticationError("Credenciais inválidas")

        session_id = generate_session_id()
        self._storage.session_store.set(
            session_id,
            {"user_id": user.id},
            ttl=self._settings.SESSION_TTL_SECONDS,
        )
        await self._audit.record(user.id, "logged_in", "user", user.id)

        logger.info("Login realizado", user_id=user.id)
        return session_id, to_response(user)

    async def logout(self, session_id: str) -> bool:
        """Encerra a sessão. False se ela já não existia."""
        session = self._storage.session_store.get(session_id)
        if session is None:
            return False

        await self._audit.record(session["user_id"], "logged_out", "user", session["user_id"])
        return self._storage.session_store.destroy(session_id)

    async def current_user(self, session_id: str) -> UserRead | None:
        """Usuário da sessão; None se a sessão expirou ou o usuário não existe mais."""
        session = self._storage.session_store.get(session_id)
        if session is None:
            return None
        return await self._storage.get_user(session["user_id"])

    async def require_user(self, session_id: str) -> UserRead:
        """
        Como `current_user`, mas exige sessão válida.

        Raises:
            SessionExpiredError: sessão inexistente, expirada ou de usuário removido
        """
        user = await self.current_user(session_id)
        if user is None:
            raise SessionExpiredError()
        self._storage.session_store.touch(session_id)
        return user
