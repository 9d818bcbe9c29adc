"""
Testes de CRUD do storage (executados nos backends em memória e SQL).
"""
from datetime import date

import pytest

from conftest import make_company, make_user
from taskflow.models.company import TaxRegime
from taskflow.models.contract import ContractType
from taskflow.models.obligation import Recurrence
from taskflow.models.supplier import SupplierType
from taskflow.schemas.company import CompanyUpdate
from taskflow.schemas.contract import ContractCreate
from taskflow.schemas.department import DepartmentCreate, DepartmentUpdate
from taskflow.schemas.file import FileCreate
from taskflow.schemas.obligation import ObligationCreate, ObligationUpdate
from taskflow.schemas.supplier import SupplierCreate, SupplierUpdate
from taskflow.schemas.task import TaskCreate, TaskUpdate
from taskflow.schemas.user import UserUpdate
from taskflow.storage import DEFAULT_DEPARTMENTS


@pytest.mark.asyncio
async def test_default_departments_seeded(storage):
    """Testa carga dos departamentos padrão."""
    departments = await storage.get_departments()

    assert [d.name for d in departments] == [d.name for d in DEFAULT_DEPARTMENTS]
    assert (await storage.get_department_by_name("Fiscal")).description == "Departamento Fiscal"


@pytest.mark.asyncio
async def test_create_and_get_user(storage):
    """Testa que a leitura por id devolve o registro criado."""
    user = await make_user(storage, "maria")

    assert user.id is not None
    assert await storage.get_user(user.id) == user
    assert await storage.get_users() == [user]


@pytest.mark.asyncio
async def test_ids_are_unique_and_increasing(storage):
    """Testa ids únicos e crescentes por tipo de entidade."""
    companies = [
        await make_company(storage, f"Empresa {i}", f"00.000.000/0001-0{i}") for i in range(5)
    ]
    ids = [c.id for c in companies]

    assert len(set(ids)) == 5
    assert ids == sorted(ids)


@pytest.mark.asyncio
async def test_ids_not_reused_after_delete(storage):
    """Testa que ids excluídos não são reaproveitados."""
    first = await make_company(storage, "Primeira", "1")
    await storage.delete_company(first.id)
    second = await make_company(storage, "Segunda", "2")

    assert second.id > first.id


@pytest.mark.asyncio
async def test_get_missing_returns_none(storage):
    """Testa leitura de ids inexistentes."""
    assert await storage.get_user(999) is None
    assert await storage.get_company(999) is None
    assert await storage.get_task(999) is None
    assert await storage.get_file(999) is None


@pytest.mark.asyncio
async def test_lookups_are_case_sensitive(storage):
    """Testa que buscas por chave única diferenciam maiúsculas."""
    await make_user(storage, "alice")

    assert await storage.get_user_by_username("Alice") is None
    assert (await storage.get_user_by_username("alice")).username == "alice"
    assert await storage.get_user_by_email("ALICE@taskflow.com.br") is None
    assert await storage.get_department_by_name("fiscal") is None


@pytest.mark.asyncio
async def test_update_user_merges_fields(storage):
    """Testa atualização parcial de usuário."""
    user = await make_user(storage, "maria")

    updated = await storage.update_user(user.id, UserUpdate(position="Contadora"))

    assert updated.position == "Contadora"
    assert updated.name == user.name
    assert updated.email == user.email


@pytest.mark.asyncio
async def test_empty_update_keeps_record(storage):
    """Testa que atualização vazia devolve o mesmo registro."""
    company = await make_company(storage)

    assert await storage.update_company(company.id, CompanyUpdate()) == company


@pytest.mark.asyncio
async def test_empty_update_refreshes_updated_timestamp(storage):
    """Testa que atualização vazia de tarefa só renova `updated`."""
    task = await storage.create_task(
        TaskCreate(title="DCTF", due_date=date(2024, 7, 15), competence_month=6, competence_year=2024)
    )

    updated = await storage.update_task(task.id, TaskUpdate())

    assert updated.model_dump(exclude={"updated"}) == task.model_dump(exclude={"updated"})
    assert updated.updated >= task.updated


@pytest.mark.asyncio
async def test_update_missing_returns_none(storage):
    """Testa que atualizar id inexistente não cria registro."""
    assert await storage.update_company(999, CompanyUpdate(name="Nova")) is None
    assert await storage.update_task(999, TaskUpdate(title="Nova")) is None
    assert await storage.update_department(999, DepartmentUpdate(name="Novo")) is None
    assert await storage.get_companies() == []


@pytest.mark.asyncio
async def test_delete_returns_bool(storage):
    """Testa exclusão de registro existente e inexistente."""
    company = await make_company(storage)

    assert await storage.delete_company(company.id) is True
    assert await storage.delete_company(company.id) is False
    assert await storage.get_company(company.id) is None


@pytest.mark.asyncio
async def test_reads_return_copies(storage):
    """Testa que alterar o objeto retornado não altera o storage."""
    company = await make_company(storage)

    company.name = "Alterada"
    listed = await storage.get_companies()
    listed[0].name = "Alterada na lista"

    assert (await storage.get_company(company.id)).name == "Acme"


@pytest.mark.asyncio
async def test_supplier_update_clears_explicit_none(storage):
    """Testa que campos enviados como None são apagados e os omitidos mantidos."""
    supplier = await storage.create_supplier(
        SupplierCreate(
            name="Bob Supplies",
            type=SupplierType.SUPPLIER,
            document="123",
            contact="Bob",
            phone="11 99999-0000",
        )
    )

    updated = await storage.update_supplier(supplier.id, SupplierUpdate(contact=None))

    assert updated.contact is None
    assert updated.phone == "11 99999-0000"
    assert (await storage.get_supplier_by_document("123")).contact is None


@pytest.mark.asyncio
async def test_department_crud(storage):
    """Testa ciclo de vida de departamento."""
    department = await storage.create_department(DepartmentCreate(name="Jurídico"))

    updated = await storage.update_department(
        department.id, DepartmentUpdate(description="Departamento Jurídico")
    )

    assert updated.name == "Jurídico"
    assert updated.description == "Departamento Jurídico"
    assert await storage.delete_department(department.id) is True
    assert await storage.get_department_by_name("Jurídico") is None


@pytest.mark.asyncio
async def test_obligation_crud(storage):
    """Testa ciclo de vida de obrigação."""
    obligation = await storage.create_obligation(
        ObligationCreate(name="DCTF", due_day=15, recurrence=Recurrence.MONTHLY)
    )

    updated = await storage.update_obligation(obligation.id, ObligationUpdate(due_day=20))

    assert updated.due_day == 20
    assert updated.recurrence == Recurrence.MONTHLY
    assert await storage.get_obligations() == [updated]


@pytest.mark.asyncio
async def test_contract_timestamps(storage):
    """Testa timestamps atribuídos pelo storage em contratos."""
    company = await make_company(storage)
    contract = await storage.create_contract(
        ContractCreate(
            number="CT-001",
            title="Honorários contábeis",
            contract_type=ContractType.SERVICE,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            value="R$ 1.500,00",
            company_id=company.id,
        )
    )

    assert contract.created is not None
    assert contract.updated is not None
    assert await storage.get_contract(contract.id) == contract


@pytest.mark.asyncio
async def test_file_metadata(storage):
    """Testa registro e exclusão de metadados de arquivo."""
    user = await make_user(storage, "maria")
    company = await make_company(storage)

    file = await storage.save_file(
        FileCreate(
            filename="balancete.pdf",
            path="uploads/abc_balancete.pdf",
            size=2048,
            type="application/pdf",
            company_id=company.id,
            uploaded_by=user.id,
        )
    )

    assert file.uploaded is not None
    assert await storage.get_company_files(company.id) == [file]
    assert await storage.get_task_files(company.id) == []
    assert await storage.delete_file(file.id) is True
    assert await storage.get_file(file.id) is None


@pytest.mark.asyncio
async def test_company_fields_roundtrip(storage):
    """Testa persistência de todos os campos da empresa."""
    company = await make_company(storage)

    stored = await storage.get_company_by_cnpj("11.111.111/0001-11")

    assert stored == company
    assert stored.tax_regime == TaxRegime.SIMPLES
    assert stored.address is None
