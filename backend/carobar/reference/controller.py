"""Reference data controller factory.

One declarative `ReferenceDataConfig` per entity produces a
`ReferenceDataController` with four handlers that share authorization,
validation, key normalization and storage-error handling:

  list_records    GET     → {<plural>: [...]}
  create_record   POST    → 201 {message, <singular>}
  update_record   PUT     → {message, <singular>}   (always a rekey)
  delete_record   DELETE  → {message}

`build_router()` mounts the handlers on a FastAPI router. Mounted writes
commit, then drop the entity's cached list (`commit_and_invalidate`).
Entity routers that need extra behaviour (pagination, in-use guards) call
the handler methods directly and wrap them.

Usage:
    color_controller = create_reference_data_controller(
        ReferenceDataConfig(
            model=Color,
            entity_name="Color",
            response_prop_name="colors",
            schema=ColorIn,
            primary_key=PrimaryKey(field="color", composite_name="pk_color"),
            allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        )
    )
    router = color_controller.build_router()
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Literal

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.auth.deps import AuthUser, get_current_user
from carobar.auth.roles import Role, has_role
from carobar.database import get_db
from carobar.middleware.exceptions import (
    BadRequestError,
    CarobarException,
    ConflictError,
    PermissionDeniedError,
    PersistenceError,
    RequestValidationFailed,
    ResourceNotFoundError,
    format_validation_errors,
)
from carobar.models.audit import utcnow
from carobar.reference.repository import ModelT, ReferenceRepository, record_to_dict
from carobar.reference.service import reference_cache_key
from carobar.utils.cache import invalidate_cache

logger = logging.getLogger(__name__)

Operation = Literal["read", "create", "update", "delete"]
OPERATIONS: tuple[Operation, ...] = ("read", "create", "update", "delete")


def uppercase_key(value: str) -> str:
    """Default key normalizer: trim surrounding whitespace, then uppercase."""
    return value.strip().upper()


# ── Configuration ───────────────────────────────────────────

@dataclass(frozen=True)
class PrimaryKey:
    """The field that, together with company_id, addresses one record.

    `composite_name` is the name of the table's primary-key constraint;
    `url_param_name` overrides the DELETE query parameter name.
    """
    field: str
    composite_name: str
    url_param_name: str | None = None

    @property
    def param_name(self) -> str:
        return self.url_param_name or self.field


@dataclass(frozen=True)
class AllowedRoles:
    read: frozenset[Role]
    create: frozenset[Role]
    update: frozenset[Role]
    delete: frozenset[Role]

    @classmethod
    def uniform(cls, roles: frozenset[Role]) -> AllowedRoles:
        """Same allowlist for every operation."""
        return cls(read=roles, create=roles, update=roles, delete=roles)

    def for_operation(self, operation: Operation) -> frozenset[Role]:
        return getattr(self, operation)


@dataclass(frozen=True)
class ReferenceDataConfig(Generic[ModelT]):
    model: type[ModelT]
    entity_name: str
    response_prop_name: str
    schema: type[BaseModel]
    primary_key: PrimaryKey
    allowed_roles: AllowedRoles
    order_by_field: str | None = None
    order_direction: Literal["asc", "desc"] = "asc"
    format_value: Callable[[str], str] = uppercase_key
    record_prop_name: str | None = None
    # Extra entity names accepted as old<Alias>/new<Alias> in PUT bodies
    body_aliases: tuple[str, ...] = ()
    # Cached list dropped after every committed write (see reference.service)
    cache_name: str | None = None

    def __post_init__(self):
        table = self.model.__table__
        pk = table.primary_key
        if pk.name != self.primary_key.composite_name:
            raise ValueError(
                f"{table.name}: primary key constraint is {pk.name!r}, "
                f"not {self.primary_key.composite_name!r}"
            )
        if {c.name for c in pk.columns} != {"company_id", self.primary_key.field}:
            raise ValueError(
                f"{table.name}: primary key must be (company_id, {self.primary_key.field})"
            )
        if self.order_by_field and self.order_by_field not in table.columns:
            raise ValueError(f"{table.name}: unknown order_by_field {self.order_by_field!r}")
        if self.order_direction not in ("asc", "desc"):
            raise ValueError(f"Invalid order_direction {self.order_direction!r}")

    @property
    def sort_field(self) -> str:
        return self.order_by_field or self.primary_key.field

    @property
    def singular_prop_name(self) -> str:
        if self.record_prop_name:
            return self.record_prop_name
        name = self.response_prop_name
        return name[:-1] if name.endswith("s") else name


# ── Controller ──────────────────────────────────────────────

class ReferenceDataController(Generic[ModelT]):
    def __init__(self, config: ReferenceDataConfig[ModelT]):
        self.config = config

    # -- shared steps -------------------------------------------------

    @property
    def key_field(self) -> str:
        return self.config.primary_key.field

    def repository(self, db: AsyncSession) -> ReferenceRepository[ModelT]:
        return ReferenceRepository(db, self.config.model, self.key_field)

    def authorize(self, operation: Operation, user: AuthUser) -> None:
        """Raise 403 unless the caller's role may perform `operation`."""
        if not has_role(user.role_id, self.config.allowed_roles.for_operation(operation)):
            logger.warning(
                f"{self.config.entity_name} {operation} denied for role "
                f"{user.role_id!r} (company {user.company_id})"
            )
            raise PermissionDeniedError()

    def normalize_key(self, value: Any) -> str:
        key = self.config.format_value(str(value))
        if not key.strip():
            raise RequestValidationFailed([{
                "field": self.key_field,
                "message": "Value must not be blank",
                "type": "blank_key",
            }])
        return key

    def validate(self, body: Any) -> dict[str, Any]:
        """Validate one record against the entity schema, return plain data."""
        try:
            return self.config.schema.model_validate(body).model_dump()
        except ValidationError as exc:
            raise RequestValidationFailed(format_validation_errors(exc.errors())) from exc

    def serialize(self, record: ModelT) -> dict[str, Any]:
        return record_to_dict(record)

    @contextmanager
    def storage_errors(
        self,
        operation: Operation,
        user: AuthUser,
        failure_message: str,
        conflict_message: str | None = None,
    ) -> Iterator[None]:
        """Map storage failures to Conflict (unique violation) or a generic 500.

        Anticipated failures (CarobarException) pass through untouched.
        """
        try:
            yield
        except CarobarException:
            raise
        except IntegrityError as exc:
            logger.warning(
                f"{self.config.entity_name} {operation} hit a constraint for company "
                f"{user.company_id}: {exc.orig if exc.orig is not None else exc}"
            )
            if conflict_message is None:
                raise PersistenceError(failure_message) from exc
            raise ConflictError(conflict_message) from exc
        except Exception as exc:
            logger.error(
                f"{self.config.entity_name} {operation} failed for company "
                f"{user.company_id}: {exc}",
                exc_info=True,
            )
            raise PersistenceError(failure_message) from exc

    async def commit_and_invalidate(self, db: AsyncSession, user: AuthUser) -> None:
        """Commit the write, then drop the company's cached list for this entity."""
        await db.commit()
        if self.config.cache_name:
            await invalidate_cache(reference_cache_key(self.config.cache_name, user.company_id))

    def _split_update_body(self, body: Any) -> tuple[Any, Any]:
        if not isinstance(body, dict):
            return None, None
        for name in (self.config.entity_name, *self.config.body_aliases):
            old, new = body.get(f"old{name}"), body.get(f"new{name}")
            if old or new:
                return old, new
        return None, None

    # -- handlers -----------------------------------------------------

    async def list_records(self, db: AsyncSession, user: AuthUser) -> dict[str, Any]:
        cfg = self.config
        self.authorize("read", user)
        logger.debug(f"Fetching {cfg.response_prop_name} for company: {user.company_id}")

        with self.storage_errors("read", user, f"Failed to fetch {cfg.response_prop_name}"):
            records = await self.repository(db).find_many(
                user.company_id, cfg.sort_field, cfg.order_direction
            )

        logger.info(f"Found {len(records)} {cfg.response_prop_name} for company {user.company_id}")
        return {cfg.response_prop_name: [self.serialize(r) for r in records]}

    async def create_record(self, db: AsyncSession, user: AuthUser, body: Any) -> dict[str, Any]:
        cfg = self.config
        self.authorize("create", user)

        data = self.validate(body)
        key = self.normalize_key(data[self.key_field])
        conflict = f"{cfg.entity_name} already exists for this company"
        repo = self.repository(db)

        with self.storage_errors(
            "create", user, f"Failed to create {cfg.entity_name.lower()}", conflict
        ):
            if await repo.find_unique(user.company_id, key) is not None:
                raise ConflictError(conflict)

            now = utcnow()
            record = await repo.create({
                **data,
                "company_id": user.company_id,
                self.key_field: key,
                "created_by": user.user_id,
                "created_at": now,
                "updated_by": user.user_id,
                "updated_at": now,
            })

        logger.info(f"{cfg.entity_name} created: {key} for company {user.company_id}")
        return {
            "message": f"{cfg.entity_name} created successfully",
            cfg.singular_prop_name: self.serialize(record),
        }

    async def update_record(self, db: AsyncSession, user: AuthUser, body: Any) -> dict[str, Any]:
        """Rekey the record named by old<Entity> to the values in new<Entity>.

        Runs the same delete + create path whether or not the key changes.
        """
        cfg = self.config
        self.authorize("update", user)

        old_view, new_view = self._split_update_body(body)
        if not old_view or not new_view:
            raise BadRequestError(f"Both old{cfg.entity_name} and new{cfg.entity_name} required")

        data = self.validate(new_view)

        old_raw = old_view.get(self.key_field) if isinstance(old_view, dict) else None
        new_raw = data.get(self.key_field)
        if not old_raw or not new_raw:
            raise BadRequestError(f"{self.key_field} is required in both old and new records")

        old_key = self.normalize_key(old_raw)
        new_key = self.normalize_key(new_raw)
        conflict = f"New {cfg.entity_name.lower()} already exists for this company"
        repo = self.repository(db)

        with self.storage_errors(
            "update", user, f"Failed to update {cfg.entity_name.lower()}", conflict
        ):
            existing = await repo.find_unique(user.company_id, old_key)
            if existing is None:
                raise ResourceNotFoundError(f"{cfg.entity_name} does not exist")

            if new_key != old_key and await repo.find_unique(user.company_id, new_key) is not None:
                raise ConflictError(conflict)

            record = await repo.rekey(existing, {
                **data,
                "company_id": user.company_id,
                self.key_field: new_key,
                "updated_by": user.user_id,
                "updated_at": utcnow(),
            })

        logger.info(
            f"{cfg.entity_name} updated: {old_key} -> {new_key} for company {user.company_id}"
        )
        return {
            "message": f"{cfg.entity_name} updated successfully",
            cfg.singular_prop_name: self.serialize(record),
        }

    async def delete_record(
        self, db: AsyncSession, user: AuthUser, raw_key: str | None
    ) -> dict[str, Any]:
        cfg = self.config
        self.authorize("delete", user)

        if not raw_key:
            raise BadRequestError(f"{cfg.primary_key.param_name} parameter is required")
        key = self.normalize_key(raw_key)
        repo = self.repository(db)

        with self.storage_errors(
            "delete",
            user,
            f"Failed to delete {cfg.entity_name.lower()}",
            f"{cfg.entity_name} is referenced by other records and cannot be deleted",
        ):
            existing = await repo.find_unique(user.company_id, key)
            if existing is None:
                raise ResourceNotFoundError(f"{cfg.entity_name} does not exist")
            await repo.delete(existing)

        logger.info(f"{cfg.entity_name} deleted: {key} for company {user.company_id}")
        return {"message": f"{cfg.entity_name} deleted successfully"}

    # -- HTTP mounting ------------------------------------------------

    def build_router(self, operations: tuple[Operation, ...] = OPERATIONS) -> APIRouter:
        """Mount the selected handlers on a router at path "".

        Include it with the entity prefix, e.g.
        `app.include_router(router, prefix="/api/colors")`.
        """
        router = APIRouter()
        plural = self.config.response_prop_name
        param_name = self.config.primary_key.param_name

        if "read" in operations:
            @router.get("", name=f"list_{plural}")
            async def list_records(
                db: AsyncSession = Depends(get_db),
                user: AuthUser = Depends(get_current_user),
            ):
                return await self.list_records(db, user)

        if "create" in operations:
            @router.post("", name=f"create_{plural}", status_code=status.HTTP_201_CREATED)
            async def create_record(
                request: Request,
                db: AsyncSession = Depends(get_db),
                user: AuthUser = Depends(get_current_user),
            ):
                self.authorize("create", user)
                result = await self.create_record(db, user, await read_json(request))
                await self.commit_and_invalidate(db, user)
                return result

        if "update" in operations:
            @router.put("", name=f"update_{plural}")
            async def update_record(
                request: Request,
                db: AsyncSession = Depends(get_db),
                user: AuthUser = Depends(get_current_user),
            ):
                self.authorize("update", user)
                result = await self.update_record(db, user, await read_json(request))
                await self.commit_and_invalidate(db, user)
                return result

        if "delete" in operations:
            @router.delete("", name=f"delete_{plural}")
            async def delete_record(
                request: Request,
                db: AsyncSession = Depends(get_db),
                user: AuthUser = Depends(get_current_user),
            ):
                result = await self.delete_record(
                    db, user, request.query_params.get(param_name)
                )
                await self.commit_and_invalidate(db, user)
                return result

        return router


async def read_json(request: Request) -> Any:
    """Parse the request body as JSON or raise 400."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BadRequestError("Request body must be valid JSON") from exc


def create_reference_data_controller(
    config: ReferenceDataConfig[ModelT],
) -> ReferenceDataController[ModelT]:
    """Build the handler set for one reference entity."""
    return ReferenceDataController(config)
