"""Base repository: generic CRUD, pagination and DTO mapping.

Repositories flush but never commit on their own; services call commit()
once the whole write is staged and only then invalidate cached state.
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.pagination import Page, PageParams, Pagination
from vendorhub.core.constants import DEFAULT_SORT_FIELD
from vendorhub.domain.exceptions import AlreadyExistsException
from vendorhub.infrastructure.persistence.database import Base


def contains_pattern(search: str) -> str:
    """Return an ILIKE pattern matching search anywhere, with LIKE wildcards escaped."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


ModelType = TypeVar("ModelType", bound=Base)
ResultType = TypeVar("ResultType")


class BaseRepository(Generic[ModelType, ResultType]):
    """Base repository with get, create, update, delete, paginate and commit.

    Subclasses set resource_type, unique_field and sort_fields and implement _to_result to map
    ORM rows to application DTOs.
    """

    resource_type: str = "resource"
    unique_field: str = "name"
    sort_fields: frozenset[str] = frozenset({DEFAULT_SORT_FIELD})

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def _to_result(self, obj: ModelType) -> ResultType:
        raise NotImplementedError

    async def get_entity(self, entity_id: str) -> ModelType | None:
        """Return the ORM row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get(self, entity_id: str) -> ResultType | None:
        """Return the DTO by primary key, or None."""
        obj = await self.get_entity(entity_id)
        return self._to_result(obj) if obj is not None else None

    async def _reload(self, entity_id: str) -> ModelType:
        """Re-select a row so column defaults and eager relationships reflect the flush."""
        model: Any = self.model
        stmt = (
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def exists(self, *criteria: ColumnElement[bool]) -> bool:
        """True when at least one row matches criteria."""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return bool(await self.db.scalar(stmt))

    async def _reference_exists(self, model: type[Base], entity_id: str | None) -> bool:
        if entity_id is None:
            return True
        ref: Any = model
        stmt = select(func.count()).select_from(model).where(ref.id == entity_id)
        return bool(await self.db.scalar(stmt))

    async def _flush(self, values: Mapping[str, Any]) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            raise AlreadyExistsException(
                self.resource_type,
                self.unique_field,
                str(values.get(self.unique_field, "")),
            ) from e

    async def create(self, obj: ModelType, values: Mapping[str, Any] | None = None) -> ModelType:
        """Persist a new record (flush + reload). Raises AlreadyExistsException on unique violations."""
        self.db.add(obj)
        await self._flush(values or {})
        return await self._reload(obj.id)

    async def create_from(self, **values: Any) -> ResultType:
        """Create a record from column values and return its DTO."""
        obj = self.model(**values)
        return self._to_result(await self.create(obj, values))

    async def update_fields(self, entity_id: str, values: Mapping[str, Any]) -> ResultType | None:
        """Apply column values to an existing record; None when it does not exist."""
        obj = await self.get_entity(entity_id)
        if obj is None:
            return None
        for name, value in values.items():
            setattr(obj, name, value)
        await self._flush(values)
        return self._to_result(await self._reload(entity_id))

    async def delete_by_id(self, entity_id: str) -> ResultType | None:
        """Delete a record and return its last state; None when it does not exist."""
        obj = await self.get_entity(entity_id)
        if obj is None:
            return None
        snapshot = self._to_result(obj)
        await self.db.delete(obj)
        await self.db.flush()
        return snapshot

    async def list_results(self, stmt: Select[Any]) -> list[ResultType]:
        """Execute a select of ModelType rows and map every row."""
        result = await self.db.execute(stmt)
        return [self._to_result(obj) for obj in result.scalars().unique().all()]

    async def paginate(
        self,
        stmt: Select[Any],
        params: PageParams,
        sort_columns: Mapping[str, Any],
    ) -> Page[ResultType]:
        """Count, sort, slice and map a select; returns a Page envelope.

        Args:
            stmt: Filtered select of ModelType (joins must not duplicate rows).
            params: Normalized page parameters.
            sort_columns: Whitelisted sort_by value -> column expression.
        """
        model: Any = self.model
        total = await self.db.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        column = sort_columns.get(params.sort_by, model.created_at)
        ordering = column.desc() if params.descending else column.asc()
        tiebreak = model.id.desc() if params.descending else model.id.asc()
        page_stmt = stmt.order_by(ordering, tiebreak).offset(params.offset).limit(params.limit)
        items = await self.list_results(page_stmt)
        return Page(items=items, pagination=Pagination.compute(params, total or 0))

    async def commit(self) -> None:
        """Commit the unit of work."""
        await self.db.commit()
