"""
Testes de cadastro, login e sessões.
"""
import pytest

from taskflow.core.exceptions import (
    AuthenticationError,
    ResourceAlreadyExistsError,
    SessionExpiredError,
)
from taskflow.core.security import verify_password
from taskflow.schemas.user import UserRegister


def registration(**overrides) -> UserRegister:
    data = {
        "username": "maria",
        "email": "maria@taskflow.com.br",
        "name": "Maria Souza",
        "password": "senha-forte",
    }
    data.update(overrides)
    return UserRegister(**data)


@pytest.mark.asyncio
async def test_register_hashes_password(auth_service, storage):
    """Testa que o storage recebe apenas o hash da senha."""
    user = await auth_service.register(registration())

    stored = await storage.get_user(user.id)
    assert stored.password != "senha-forte"
    assert verify_password("senha-forte", stored.password)
    assert "password" not in user.model_dump()


@pytest.mark.asyncio
async def test_register_duplicates(auth_service):
    """Testa username e email duplicados no cadastro."""
    await auth_service.register(registration())

    with pytest.raises(ResourceAlreadyExistsError) as exc_info:
        await auth_service.register(registration(email="outra@taskflow.com.br"))
    assert exc_info.value.field == "username"

    with pytest.raises(ResourceAlreadyExistsError) as exc_info:
        await auth_service.register(registration(username="maria2"))
    assert exc_info.value.field == "email"


@pytest.mark.asyncio
async def test_register_with_department(auth_service, storage):
    """Testa vínculo opcional ao departamento no cadastro."""
    fiscal = await storage.get_department_by_name("Fiscal")

    user = await auth_service.register(registration(department_id=fiscal.id))
    ghost = await auth_service.register(
        registration(username="pedro", email="pedro@taskflow.com.br", department_id=999)
    )

    assert await storage.get_user_departments(user.id) == [fiscal]
    assert await storage.get_user_departments(ghost.id) == []


@pytest.mark.asyncio
async def test_login_and_logout(auth_service, storage):
    """Testa ciclo de sessão com auditoria."""
    registered = await auth_service.register(registration())

    session_id, user = await auth_service.login("maria", "senha-forte")

    assert user.id == registered.id
    assert (await auth_service.current_user(session_id)).id == registered.id
    assert (await auth_service.require_user(session_id)).username == "maria"

    assert await auth_service.logout(session_id) is True
    assert await auth_service.current_user(session_id) is None
    assert await auth_service.logout(session_id) is False
    with pytest.raises(SessionExpiredError):
        await auth_service.require_user(session_id)

    actions = [log.action for log in await storage.get_user_audit_logs(registered.id)]
    assert actions == ["logged_out", "logged_in", "created"]


@pytest.mark.asyncio
async def test_login_invalid_credentials(auth_service):
    """Testa usuário inexistente e senha incorreta."""
    await auth_service.register(registration())

    with pytest.raises(AuthenticationError) as exc_info:
        await auth_service.login("maria", "errada")
    assert exc_info.value.status_code == 401

    with pytest.raises(AuthenticationError):
        await auth_service.login("Maria", "senha-forte")
