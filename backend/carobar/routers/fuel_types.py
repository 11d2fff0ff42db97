"""Fuel type router (read-only, shared by every company).

Endpoints:
    GET    /api/fuel-types                List fuel types (cached)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.auth.deps import AuthUser, get_current_user
from carobar.database import get_db
from carobar.middleware.exceptions import PersistenceError
from carobar.reference import service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_fuel_types(
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    try:
        fuel_types = await service.get_fuel_types(db)
    except SQLAlchemyError as exc:
        logger.error(f"Fuel type lookup failed (company {user.company_id}): {exc}", exc_info=True)
        raise PersistenceError("Failed to fetch fuel types") from exc
    return {"fuelTypes": fuel_types}
