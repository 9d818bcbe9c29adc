"""
Módulo de segurança: hashing de senhas e verificação de papéis.

O storage nunca calcula nem compara hashes; ele apenas guarda o valor
produzido aqui.
"""

import secrets
from collections.abc import Iterable

from passlib.context import CryptContext

from taskflow.core.exceptions import InsufficientPermissionsError
from taskflow.models.user import UserRole

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se a senha em texto plano corresponde ao hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Gera hash bcrypt da senha."""
    return pwd_context.hash(password)


def generate_session_id() -> str:
    """Gera identificador de sessão aleatório."""
    return secrets.token_urlsafe(32)


def require_roles(user, roles: Iterable[UserRole], action: str) -> None:
    """
    Garante que o usuário possui um dos papéis exigidos.

    Raises:
        InsufficientPermissionsError: se o papel do usuário não está na lista
    """
    if user.role not in tuple(roles):
        raise InsufficientPermissionsError(action)
