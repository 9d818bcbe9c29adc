"""
Testes de unicidade: o storage em memória não bloqueia duplicidades, o
relacional rejeita pelo índice único.
"""
import pytest
import pytest_asyncio

from conftest import TEST_SETTINGS, make_company
from taskflow.core.exceptions import ResourceAlreadyExistsError
from taskflow.models.supplier import SupplierType
from taskflow.schemas.company import CompanyUpdate
from taskflow.schemas.supplier import SupplierCreate
from taskflow.storage import SqlStorage


@pytest_asyncio.fixture
async def sql_storage():
    backend = SqlStorage.from_settings(TEST_SETTINGS)
    await backend.initialize()
    yield backend
    await backend.close()


def supplier(name: str, document: str = "123") -> SupplierCreate:
    return SupplierCreate(name=name, type=SupplierType.SUPPLIER, document=document)


@pytest.mark.asyncio
async def test_memory_duplicate_document_is_not_blocked(memory_storage):
    """Testa que o chamador precisa consultar o documento antes de criar."""
    first = await memory_storage.create_supplier(supplier("Bob Supplies"))

    assert await memory_storage.get_supplier_by_document("123") == first

    # Sem a verificação prévia, o storage em memória aceita a duplicidade
    second = await memory_storage.create_supplier(supplier("X"))

    assert second.id != first.id
    assert await memory_storage.get_supplier_by_document("123") == first
    assert len(await memory_storage.get_suppliers()) == 2


@pytest.mark.asyncio
async def test_sql_duplicate_document_is_rejected(sql_storage):
    """Testa índice único de documento no backend relacional."""
    first = await sql_storage.create_supplier(supplier("Bob Supplies"))

    with pytest.raises(ResourceAlreadyExistsError) as exc_info:
        await sql_storage.create_supplier(supplier("X"))

    assert exc_info.value.field == "document"
    assert await sql_storage.get_suppliers() == [first]


@pytest.mark.asyncio
async def test_sql_update_to_taken_cnpj_is_rejected(sql_storage):
    """Testa conflito de CNPJ ao atualizar empresa."""
    acme = await make_company(sql_storage)
    beta = await make_company(sql_storage, "Beta", "22.222.222/0001-22")

    with pytest.raises(ResourceAlreadyExistsError):
        await sql_storage.update_company(beta.id, CompanyUpdate(cnpj=acme.cnpj))

    assert (await sql_storage.get_company(beta.id)).cnpj == "22.222.222/0001-22"


@pytest.mark.asyncio
async def test_sql_seed_runs_once(sql_storage):
    """Testa que a carga inicial não duplica departamentos."""
    await sql_storage.initialize()

    assert len(await sql_storage.get_departments()) == 7
