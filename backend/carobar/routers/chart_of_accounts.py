"""Chart of accounts router.

Endpoints:
    GET    /api/chart-of-accounts                 List accounts (cached, paginated, searchable)
    POST   /api/chart-of-accounts                 Create account
    PUT    /api/chart-of-accounts                 Rename / edit account
    DELETE /api/chart-of-accounts?code=X          Delete account

The unfiltered list is cached per company for
`settings.reference_cache_ttl_seconds` and dropped after every write.
"""

import logging
import math

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.auth.deps import AuthUser, get_current_user
from carobar.config import settings
from carobar.database import get_db
from carobar.models.chart_of_account import ChartOfAccount
from carobar.reference import service
from carobar.reference.controller import read_json
from carobar.reference.entities import chart_of_accounts_controller as controller
from carobar.schemas.common import Pagination
from carobar.utils.cache import get_or_fetch

logger = logging.getLogger(__name__)

router = APIRouter()


def accounts_cache_key(company_id: str) -> str:
    return service.reference_cache_key(service.CHART_OF_ACCOUNTS, company_id)


async def load_accounts(db: AsyncSession, company_id: str, search: str = "") -> list[dict]:
    """Active accounts first, then by code. `search` matches code, name, type or description."""
    query = select(ChartOfAccount).where(ChartOfAccount.company_id == company_id)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                ChartOfAccount.account_code.ilike(pattern),
                ChartOfAccount.account_name.ilike(pattern),
                ChartOfAccount.account_type.ilike(pattern),
                ChartOfAccount.description.ilike(pattern),
            )
        )
    query = query.order_by(ChartOfAccount.is_active.desc(), ChartOfAccount.account_code.asc())
    result = await db.execute(query)
    return jsonable_encoder([controller.serialize(a) for a in result.scalars().all()])


@router.get("")
async def list_accounts(
    search: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(10, alias="pageSize", ge=0),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    """List accounts. `pageSize=0` returns every account on one page."""
    controller.authorize("read", user)
    logger.debug(
        f"Fetching COA for company: {user.company_id} with search: {search!r}, "
        f"page: {page}, pageSize: {page_size}"
    )

    with controller.storage_errors("read", user, "Failed to fetch chart of accounts"):
        if search:
            accounts = await load_accounts(db, user.company_id, search)
        else:
            accounts = await get_or_fetch(
                accounts_cache_key(user.company_id),
                lambda: load_accounts(db, user.company_id),
                ttl=settings.reference_cache_ttl_seconds,
            )

    total = len(accounts)
    if page_size == 0:
        items, total_pages = accounts, 1
    else:
        skip = (page - 1) * page_size
        items = accounts[skip:skip + page_size]
        total_pages = math.ceil(total / page_size)

    logger.info(f"Found {total} accounts for company {user.company_id}")
    pagination = Pagination(total=total, page=page, page_size=page_size, total_pages=total_pages)
    return {"coa": items, "pagination": pagination.model_dump(by_alias=True)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    controller.authorize("create", user)
    result = await controller.create_record(db, user, await read_json(request))
    await controller.commit_and_invalidate(db, user)
    return result


@router.put("")
async def update_account(
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    controller.authorize("update", user)
    result = await controller.update_record(db, user, await read_json(request))
    await controller.commit_and_invalidate(db, user)
    return result


@router.delete("")
async def delete_account(
    code: str | None = None,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    result = await controller.delete_record(db, user, code)
    await controller.commit_and_invalidate(db, user)
    return result

