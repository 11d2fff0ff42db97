"""Tenant-scoped persistence for composite-key reference tables.

Every reference table is keyed by `(company_id, <field>)`. The repository
only ever addresses rows through that pair, so one tenant can never read or
touch another tenant's rows even when key values collide.

Operations:
  find_many     → all rows of one tenant, ordered
  find_unique   → one row by (company_id, key) or None
  create        → insert and flush (unique violations surface here)
  delete        → delete and flush
  rekey         → delete + create inside one SAVEPOINT
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class ReferenceRepository(Generic[ModelT]):
    def __init__(self, db: AsyncSession, model: type[ModelT], key_field: str):
        self.db = db
        self.model = model
        self.key_field = key_field
        self._key_column = getattr(model, key_field)

    async def find_many(
        self,
        company_id: str,
        order_by: str,
        direction: str = "asc",
    ) -> list[ModelT]:
        column = getattr(self.model, order_by)
        ordering = [column.desc() if direction == "desc" else column.asc()]
        if order_by != self.key_field:
            ordering.append(self._key_column.asc())

        result = await self.db.execute(
            select(self.model)
            .where(self.model.company_id == company_id)
            .order_by(*ordering)
        )
        return list(result.scalars().all())

    async def find_unique(self, company_id: str, key: str) -> ModelT | None:
        result = await self.db.execute(
            select(self.model).where(
                self.model.company_id == company_id,
                self._key_column == key,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, values: dict[str, Any]) -> ModelT:
        record = self.model(**values)
        self.db.add(record)
        await self.db.flush()
        return record

    async def delete(self, record: ModelT) -> None:
        await self.db.delete(record)
        await self.db.flush()

    async def rekey(self, existing: ModelT, values: dict[str, Any]) -> ModelT:
        """Replace `existing` with a row built from `values`, atomically.

        The primary key cannot be updated in place, so the old row is
        deleted and a new one inserted. `created_by` / `created_at` are
        carried over from the old row. Both writes run in a SAVEPOINT:
        if either fails the old row is still there afterwards.
        """
        carried = {
            "created_by": existing.created_by,
            "created_at": existing.created_at,
        }
        async with self.db.begin_nested():
            await self.delete(existing)
            record = await self.create({**values, **carried})
        return record


def record_to_dict(record: Base) -> dict[str, Any]:
    """Column values of a mapped row, keyed by attribute name."""
    mapper = inspect(record).mapper
    return {attr.key: getattr(record, attr.key) for attr in mapper.column_attrs}
