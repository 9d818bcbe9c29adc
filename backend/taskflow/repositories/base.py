"""
Repository base com operações CRUD genéricas.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import ResourceAlreadyExistsError, StorageError
from taskflow.db.base import Base, utcnow

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repository base com operações CRUD.

    Uso:
        class CompanyRepository(BaseRepository[Company]):
            unique_fields = ("cnpj",)

            def __init__(self, db: AsyncSession):
                super().__init__(Company, db)
    """

    # Campos com índice único; usados para traduzir IntegrityError
    unique_fields: tuple[str, ...] = ()
    # Campos de timestamp renovados a cada atualização
    touch_fields: tuple[str, ...] = ()

    def __init__(self, model: type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_by_id(self, id: int) -> ModelType | None:
        """Busca entidade por ID."""
        return await self.db.get(self.model, id)

    async def get_by(self, field: str, value: Any) -> ModelType | None:
        """Primeira entidade com `field == value`, na ordem de inserção."""
        result = await self.db.execute(
            select(self.model)
            .where(getattr(self.model, field) == value)
            .order_by(self.model.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Lista todas as entidades na ordem de inserção."""
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def list_by(self, *conditions: Any) -> list[ModelType]:
        """Lista entidades que atendem às condições, na ordem de inserção."""
        result = await self.db.execute(
            select(self.model).where(*conditions).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def create(self, **kwargs: Any) -> ModelType:
        """Cria nova entidade."""
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self._commit(kwargs)
        await self.db.refresh(instance)
        return instance

    async def update(
        self,
        id: int,
        **kwargs: Any,
    ) -> ModelType | None:
        """
        Atualiza entidade existente.

        Todos os campos recebidos são gravados, inclusive None; campos não
        recebidos permanecem inalterados.
        """
        instance = await self.get_by_id(id)
        if not instance:
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)
        for key in self.touch_fields:
            setattr(instance, key, utcnow())

        await self._commit(kwargs, exclude_id=id)
        await self.db.refresh(instance)
        return instance

    async def delete(self, id: int) -> bool:
        """Remove entidade (hard delete, sem cascata)."""
        instance = await self.get_by_id(id)
        if not instance:
            return False

        await self.db.delete(instance)
        await self.db.commit()
        return True

    async def _commit(self, values: dict[str, Any], exclude_id: int | None = None) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            for field in self.unique_fields:
                value = values.get(field)
                if value is None:
                    continue
                existing = await self.get_by(field, value)
                if existing is not None and existing.id != exclude_id:
                    raise ResourceAlreadyExistsError(self.model.__name__, field, str(value)) from e
            raise StorageError(str(e.orig), operation="commit") from e
