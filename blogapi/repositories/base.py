"""
Repository base class.

Every entity repository exposes the same four operations: ``create``,
``find_many``, ``find_unique`` and ``delete_many``. Relations requested via
``include`` are eager-loaded with ``subqueryload``: the base statement is
re-used as a subquery for each relation, so a read costs one query for the
rows plus one query per included relation whatever the number of rows.
``selectinload`` is not used because it splits large key lists into chunks
of 500 and the query count would then grow with the result size.
"""

import logging
from collections.abc import Iterable
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import subqueryload

from blogapi.database import Database
from blogapi.exceptions import InvalidQueryError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    model: ClassVar[type]
    create_schema: ClassVar[type[BaseModel]]
    unique_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    def __init__(self, database: Database) -> None:
        self.database = database

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    @property
    def relations(self) -> frozenset[str]:
        return frozenset(inspect(self.model).relationships.keys())

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def _loader_options(self, include: Iterable[str] | None) -> list:
        names = set(include or ())
        unknown = names - self.relations
        if unknown:
            raise InvalidQueryError(
                f"Unknown relation(s) for {self.entity_name}: {', '.join(sorted(unknown))}",
                details={"entity": self.entity_name, "relations": sorted(unknown)},
            )
        return [subqueryload(getattr(self.model, name)) for name in sorted(names)]

    def _unique_clause(self, where: dict[str, Any]):
        if len(where) != 1 or not set(where) <= self.unique_fields:
            raise InvalidQueryError(
                f"{self.entity_name} lookups need exactly one of: {', '.join(sorted(self.unique_fields))}",
                details={"entity": self.entity_name, "where": sorted(where)},
            )
        ((field, value),) = where.items()
        return getattr(self.model, field) == value

    def _filter_clauses(self, where: dict[str, Any] | None) -> list:
        if not where:
            return []
        columns = set(inspect(self.model).columns.keys())
        unknown = set(where) - columns
        if unknown:
            raise InvalidQueryError(
                f"Unknown column(s) for {self.entity_name}: {', '.join(sorted(unknown))}",
                details={"entity": self.entity_name, "columns": sorted(unknown)},
            )
        return [getattr(self.model, field) == value for field, value in where.items()]

    def _validate(self, data: BaseModel | dict[str, Any]) -> BaseModel:
        if isinstance(data, self.create_schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            return self.create_schema.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidQueryError(
                f"Invalid {self.entity_name} data",
                details={"errors": e.errors(include_url=False)},
            ) from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def build(self, session: AsyncSession, data: BaseModel) -> ModelT:
        """Turn validated create data into a new, not yet added, instance."""
        return self.model(**data.model_dump())

    async def create(self, data: BaseModel | dict[str, Any]) -> ModelT:
        validated = self._validate(data)
        async with self.database.session() as session:
            instance = await self.build(session, validated)
            session.add(instance)
            await session.commit()
        logger.info(f"{self.entity_name} created successfully: {instance.id}")
        return instance

    async def find_many(self, include: Iterable[str] | None = None) -> list[ModelT]:
        options = self._loader_options(include)
        stmt = select(self.model).options(*options).order_by(*inspect(self.model).primary_key)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_unique(self, where: dict[str, Any], include: Iterable[str] | None = None) -> ModelT | None:
        clause = self._unique_clause(where)
        options = self._loader_options(include)
        stmt = select(self.model).where(clause).options(*options)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def delete_many(self, where: dict[str, Any] | None = None) -> int:
        """Physically delete matching rows (all rows without ``where``)."""
        stmt = delete(self.model).where(*self._filter_clauses(where)).execution_options(synchronize_session=False)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            await session.commit()
        logger.info(f"Deleted {result.rowcount} {self.entity_name} row(s)")
        return result.rowcount
