"""
Testes da camada de serviços: permissões, referências, unicidade e auditoria.
"""
from datetime import date, timedelta

import pytest

from conftest import TODAY, make_company, make_user
from taskflow.core.exceptions import (
    FileTooLargeError,
    InsufficientPermissionsError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)
from taskflow.core.uploads import UploadStorage
from taskflow.models.company import TaxRegime
from taskflow.models.contract import ContractType
from taskflow.models.obligation import Recurrence
from taskflow.models.supplier import SupplierType
from taskflow.models.task import TaskStatus
from taskflow.models.user import UserRole
from taskflow.schemas.company import CompanyCreate, CompanyUpdate
from taskflow.schemas.contract import ContractCreate, ContractFilters
from taskflow.schemas.department import DepartmentCreate
from taskflow.schemas.obligation import ObligationCreate, ObligationUpdate
from taskflow.schemas.supplier import SupplierCreate, SupplierUpdate
from taskflow.schemas.task import TaskCommentCreate, TaskCreate, TaskFilters, TaskUpdate
from taskflow.schemas.user import UserUpdate
from taskflow.services import AuditService, CompanyService, FileService


def new_task(**overrides) -> TaskCreate:
    data = {
        "title": "Apuração de PIS/COFINS",
        "due_date": TODAY + timedelta(days=3),
        "competence_month": 5,
        "competence_year": 2024,
    }
    data.update(overrides)
    return TaskCreate(**data)


# === Empresas ===

@pytest.mark.asyncio
async def test_create_company_audits(company_service, audit, admin):
    """Testa criação de empresa com registro de auditoria."""
    company = await company_service.create(
        admin, CompanyCreate(name="Acme", cnpj="11.111.111/0001-11", tax_regime=TaxRegime.SIMPLES)
    )

    logs = await audit.for_entity(admin, "company", company.id)
    assert [log.action for log in logs] == ["created"]
    assert logs[0].user_id == admin.id


@pytest.mark.asyncio
async def test_create_company_duplicate_cnpj(company_service, storage, admin):
    """Testa CNPJ duplicado."""
    await make_company(storage)

    with pytest.raises(ResourceAlreadyExistsError) as exc_info:
        await company_service.create(
            admin,
            CompanyCreate(name="Outra", cnpj="11.111.111/0001-11", tax_regime=TaxRegime.REAL),
        )
    assert exc_info.value.field == "cnpj"


@pytest.mark.asyncio
async def test_update_company_keeps_own_cnpj(company_service, storage, admin):
    """Testa que reenviar o próprio CNPJ não é conflito."""
    company = await make_company(storage)

    updated = await company_service.update(
        admin, company.id, CompanyUpdate(name="Acme Ltda", cnpj=company.cnpj)
    )

    assert updated.name == "Acme Ltda"


@pytest.mark.asyncio
async def test_delete_company_requires_manager(company_service, storage, employee, manager):
    """Testa que funcionário não exclui empresa."""
    company = await make_company(storage)

    with pytest.raises(InsufficientPermissionsError):
        await company_service.delete(employee, company.id)

    await company_service.delete(manager, company.id)
    assert await storage.get_company(company.id) is None


@pytest.mark.asyncio
async def test_delete_missing_company(company_service, admin):
    """Testa exclusão de empresa inexistente."""
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await company_service.delete(admin, 999)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_assign_obligation_checks_references(company_service, storage, admin):
    """Testa vínculo de obrigação com referências válidas e inválidas."""
    company = await make_company(storage)
    obligation = await storage.create_obligation(
        ObligationCreate(name="DCTF", due_day=15, recurrence=Recurrence.MONTHLY)
    )

    with pytest.raises(ResourceNotFoundError):
        await company_service.assign_obligation(admin, company.id, 999)
    with pytest.raises(ResourceNotFoundError):
        await company_service.assign_obligation(admin, company.id, obligation.id, responsible_id=999)

    link = await company_service.assign_obligation(admin, company.id, obligation.id, admin.id)

    assert link.responsible_id == admin.id
    assert await company_service.obligations(company.id) == [obligation]

    await company_service.remove_obligation(admin, company.id, obligation.id)
    with pytest.raises(ResourceNotFoundError):
        await company_service.remove_obligation(admin, company.id, obligation.id)


# === Obrigações ===

@pytest.mark.asyncio
async def test_obligation_crud_audits(obligation_service, company_service, audit, storage, admin):
    """Testa ciclo de vida da obrigação com auditoria e vínculo com empresa."""
    company = await make_company(storage)
    obligation = await obligation_service.create(
        admin, ObligationCreate(name="DCTF", due_day=15, recurrence=Recurrence.MONTHLY)
    )
    await company_service.assign_obligation(admin, company.id, obligation.id)

    updated = await obligation_service.update(
        admin, obligation.id, ObligationUpdate(due_day=20, description="Débitos federais")
    )
    assert updated.due_day == 20
    assert await obligation_service.list_obligations() == [updated]
    assert await company_service.obligations(company.id) == [updated]

    await obligation_service.delete(admin, obligation.id)

    assert await obligation_service.list_obligations() == []
    assert await company_service.obligations(company.id) == []
    logs = await audit.for_entity(admin, "obligation", obligation.id)
    assert [log.action for log in logs] == ["deleted", "updated", "created"]


@pytest.mark.asyncio
async def test_missing_obligation(obligation_service, admin):
    """Testa consulta, atualização e exclusão de obrigação inexistente."""
    with pytest.raises(ResourceNotFoundError):
        await obligation_service.get(999)
    with pytest.raises(ResourceNotFoundError):
        await obligation_service.update(admin, 999, ObligationUpdate(due_day=10))
    with pytest.raises(ResourceNotFoundError):
        await obligation_service.delete(admin, 999)


# === Departamentos e usuários ===

@pytest.mark.asyncio
async def test_department_roles(department_service, employee, manager, admin):
    """Testa papéis exigidos para criar e excluir departamento."""
    with pytest.raises(InsufficientPermissionsError):
        await department_service.create(employee, DepartmentCreate(name="Jurídico"))

    department = await department_service.create(manager, DepartmentCreate(name="Jurídico"))

    with pytest.raises(InsufficientPermissionsError):
        await department_service.delete(manager, department.id)

    await department_service.delete(admin, department.id)
    with pytest.raises(ResourceNotFoundError):
        await department_service.get(department.id)


@pytest.mark.asyncio
async def test_department_duplicate_name(department_service, admin):
    """Testa nome de departamento duplicado."""
    with pytest.raises(ResourceAlreadyExistsError):
        await department_service.create(admin, DepartmentCreate(name="Fiscal"))


@pytest.mark.asyncio
async def test_assign_and_remove_user(department_service, storage, audit, admin, employee):
    """Testa vínculo e desvínculo de usuário com auditoria."""
    fiscal = await storage.get_department_by_name("Fiscal")

    link = await department_service.assign_user(admin, employee.id, fiscal.id)
    users = await department_service.users(fiscal.id)

    assert [u.id for u in users] == [employee.id]
    assert not hasattr(users[0], "password")

    await department_service.remove_user(admin, employee.id, fiscal.id)
    with pytest.raises(ResourceNotFoundError):
        await department_service.remove_user(admin, employee.id, fiscal.id)

    actions = [log.action for log in await audit.for_user(admin, admin.id)]
    assert actions == ["removed", "assigned"]
    assert (await audit.for_entity(admin, "user_department", link.id))[0].action == "assigned"


@pytest.mark.asyncio
async def test_assign_user_to_missing_department(department_service, admin, employee):
    """Testa vínculo com departamento inexistente."""
    with pytest.raises(ResourceNotFoundError):
        await department_service.assign_user(admin, employee.id, 999)


@pytest.mark.asyncio
async def test_user_update_permissions(user_service, storage, admin, employee):
    """Testa que só o próprio usuário ou um admin edita o perfil."""
    other = await make_user(storage, "pedro")

    with pytest.raises(InsufficientPermissionsError):
        await user_service.update(employee, other.id, UserUpdate(name="Outro"))
    with pytest.raises(InsufficientPermissionsError):
        await user_service.update(employee, employee.id, UserUpdate(role=UserRole.ADMIN))

    mine = await user_service.update(employee, employee.id, UserUpdate(position="Analista"))
    theirs = await user_service.update(admin, other.id, UserUpdate(role=UserRole.MANAGER))

    assert mine.position == "Analista"
    assert theirs.role == UserRole.MANAGER


@pytest.mark.asyncio
async def test_user_update_duplicate_username(user_service, admin, employee):
    """Testa username já usado por outro usuário."""
    with pytest.raises(ResourceAlreadyExistsError):
        await user_service.update(admin, employee.id, UserUpdate(username="admin"))


@pytest.mark.asyncio
async def test_user_listing_hides_password(user_service, admin, employee):
    """Testa que as leituras de usuário não expõem a senha."""
    users = await user_service.list_users()

    assert [u.username for u in users] == ["admin", "joana"]
    assert all("password" not in u.model_dump() for u in users)


# === Fornecedores ===

@pytest.mark.asyncio
async def test_supplier_duplicate_document(supplier_service, admin):
    """Testa verificação prévia de documento do fornecedor."""
    data = SupplierCreate(name="Bob Supplies", type=SupplierType.SUPPLIER, document="123")
    first = await supplier_service.create(admin, data)

    with pytest.raises(ResourceAlreadyExistsError):
        await supplier_service.create(admin, data.model_copy(update={"name": "X"}))

    assert await supplier_service.list_suppliers() == [first]


@pytest.mark.asyncio
async def test_supplier_update_and_delete(supplier_service, admin, employee):
    """Testa atualização com limpeza de campo e exclusão restrita."""
    supplier = await supplier_service.create(
        admin,
        SupplierCreate(name="Gráfica", type=SupplierType.SERVICE_PROVIDER, document="9", notes="x"),
    )

    updated = await supplier_service.update(admin, supplier.id, SupplierUpdate(notes=None))
    assert updated.notes is None

    with pytest.raises(InsufficientPermissionsError):
        await supplier_service.delete(employee, supplier.id)
    await supplier_service.delete(admin, supplier.id)
    with pytest.raises(ResourceNotFoundError):
        await supplier_service.get(supplier.id)


# === Tarefas ===

@pytest.mark.asyncio
async def test_create_task_checks_references(task_service, storage, admin):
    """Testa que referências inexistentes são rejeitadas."""
    for field in ("company_id", "department_id", "responsible_id", "contract_id"):
        with pytest.raises(ResourceNotFoundError):
            await task_service.create(admin, new_task(**{field: 999}))

    assert await storage.get_tasks() == []


@pytest.mark.asyncio
async def test_update_task_checks_references(task_service, admin):
    """Testa atualização de tarefa inexistente e com referência inválida."""
    task = await task_service.create(admin, new_task())

    with pytest.raises(ResourceNotFoundError):
        await task_service.update(admin, 999, TaskUpdate(title="Nova"))
    with pytest.raises(ResourceNotFoundError):
        await task_service.update(admin, task.id, TaskUpdate(company_id=999))

    cleared = await task_service.update(admin, task.id, TaskUpdate(description=None))
    assert cleared.description is None


@pytest.mark.asyncio
async def test_list_tasks_filter_precedence(task_service, storage, admin, employee):
    """Testa que só o primeiro filtro informado é aplicado."""
    acme = await make_company(storage)
    fiscal = await storage.get_department_by_name("Fiscal")
    company_task = await task_service.create(admin, new_task(company_id=acme.id))
    department_task = await task_service.create(
        admin, new_task(department_id=fiscal.id, responsible_id=employee.id)
    )

    assert await task_service.list_tasks(
        TaskFilters(company_id=acme.id, department_id=fiscal.id)
    ) == [company_task]
    assert await task_service.list_tasks(
        TaskFilters(department_id=fiscal.id, status=TaskStatus.COMPLETED)
    ) == [department_task]
    assert await task_service.list_tasks(TaskFilters(status=TaskStatus.COMPLETED)) == []
    assert len(await task_service.list_tasks()) == 2


@pytest.mark.asyncio
async def test_task_comments(task_service, audit, admin, employee):
    """Testa comentários com auditoria na tarefa."""
    task = await task_service.create(admin, new_task())

    comment = await task_service.add_comment(employee, task.id, TaskCommentCreate(comment="Enviado"))

    assert comment.user_id == employee.id
    assert await task_service.comments(task.id) == [comment]
    with pytest.raises(ResourceNotFoundError):
        await task_service.add_comment(employee, 999, TaskCommentCreate(comment="?"))

    actions = [log.action for log in await audit.for_entity(admin, "task", task.id)]
    assert actions == ["commented", "created"]


@pytest.mark.asyncio
async def test_sync_overdue_statuses(task_service, storage, admin):
    """Testa a transição explícita para o status overdue."""
    late = await task_service.create(admin, new_task(due_date=TODAY - timedelta(days=2)))
    done = await task_service.create(
        admin, new_task(due_date=TODAY - timedelta(days=2), status=TaskStatus.COMPLETED)
    )
    future = await task_service.create(admin, new_task())

    updated = await task_service.sync_overdue_statuses(admin)

    assert [t.id for t in updated] == [late.id]
    assert (await storage.get_task(late.id)).status == TaskStatus.OVERDUE
    assert (await storage.get_task(done.id)).status == TaskStatus.COMPLETED
    assert (await storage.get_task(future.id)).status == TaskStatus.PENDING
    assert await task_service.sync_overdue_statuses(admin) == []


# === Contratos ===

@pytest.mark.asyncio
async def test_contract_requires_existing_company(contract_service, storage, admin, employee):
    """Testa empresa obrigatória e exclusão restrita de contrato."""
    data = {
        "number": "CT-10",
        "title": "Prestação de serviços contábeis",
        "contract_type": ContractType.SERVICE,
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 12, 31),
        "value": "R$ 2.000,00",
    }
    with pytest.raises(ResourceNotFoundError):
        await contract_service.create(admin, ContractCreate(company_id=999, **data))

    acme = await make_company(storage)
    contract = await contract_service.create(admin, ContractCreate(company_id=acme.id, **data))

    assert await contract_service.list_contracts(ContractFilters(company_id=acme.id)) == [contract]
    with pytest.raises(InsufficientPermissionsError):
        await contract_service.delete(employee, contract.id)
    await contract_service.delete(admin, contract.id)
    assert await contract_service.list_contracts() == []


# === Arquivos ===

@pytest.mark.asyncio
async def test_upload_file(file_service, storage, admin):
    """Testa upload com gravação em disco e metadados."""
    acme = await make_company(storage)

    file = await file_service.upload(
        admin, "balancete.pdf", b"%PDF-1.4", "application/pdf", company_id=acme.id
    )

    assert file.size == 8
    assert file.uploaded_by == admin.id
    assert file.path.endswith("_balancete.pdf")
    assert await file_service.list_files(company_id=acme.id) == [file]
    assert await file_service.get_path(file.id) == file.path

    await file_service.delete(admin, file.id)
    with pytest.raises(ResourceNotFoundError):
        await file_service.get(file.id)


@pytest.mark.asyncio
async def test_upload_requires_existing_target(file_service, admin):
    """Testa vínculo obrigatório e existente no upload."""
    with pytest.raises(ValidationError):
        await file_service.upload(admin, "a.txt", b"a", "text/plain")
    with pytest.raises(ResourceNotFoundError):
        await file_service.upload(admin, "a.txt", b"a", "text/plain", task_id=999)
    with pytest.raises(ValidationError):
        await file_service.list_files()


@pytest.mark.asyncio
async def test_upload_size_limit(file_service, storage, admin):
    """Testa limite de tamanho do upload."""
    acme = await make_company(storage)

    with pytest.raises(FileTooLargeError):
        await file_service.upload(
            admin, "grande.bin", b"0" * (1024 * 1024 + 1), "application/octet-stream",
            company_id=acme.id,
        )
    assert await storage.get_company_files(acme.id) == []


@pytest.mark.asyncio
async def test_upload_discards_content_when_metadata_fails(memory_storage, tmp_path):
    """Testa que o conteúdo gravado é removido se os metadados não forem salvos."""
    admin = await make_user(memory_storage, "admin", UserRole.ADMIN)
    acme = await make_company(memory_storage)

    async def broken_save_file(*args, **kwargs):
        raise StorageError("conexão perdida", operation="commit")

    memory_storage.save_file = broken_save_file
    upload_dir = tmp_path / "uploads"
    service = FileService(memory_storage, AuditService(memory_storage), UploadStorage(upload_dir))

    with pytest.raises(StorageError):
        await service.upload(admin, "a.pdf", b"x", "application/pdf", company_id=acme.id)

    assert list(upload_dir.iterdir()) == []


# === Auditoria ===

@pytest.mark.asyncio
async def test_audit_reads_require_manager(audit, employee, manager):
    """Testa que apenas admin ou manager consultam a auditoria."""
    with pytest.raises(InsufficientPermissionsError):
        await audit.list_all(employee)

    assert await audit.list_all(manager) == []


@pytest.mark.asyncio
async def test_audit_failure_does_not_abort_operation(memory_storage):
    """Testa que falha na auditoria não interrompe a operação principal."""
    admin = await make_user(memory_storage, "admin", UserRole.ADMIN)

    async def broken_audit_log(*args, **kwargs):
        raise RuntimeError("disco cheio")

    memory_storage.add_audit_log = broken_audit_log
    audit = AuditService(memory_storage)

    assert await audit.record(admin.id, "created", "company", 1) is None

    company = await CompanyService(memory_storage, audit).create(
        admin, CompanyCreate(name="Acme", cnpj="1", tax_regime=TaxRegime.SIMPLES)
    )
    assert await memory_storage.get_company(company.id) == company
