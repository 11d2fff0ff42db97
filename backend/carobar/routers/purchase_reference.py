"""Reference data bundles for transaction forms.

Endpoints:
    GET    /api/reference-data/purchase   Every lookup the purchase form needs
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


@router.get("/purchase")
async def purchase_reference_data(
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    """Countries, suppliers, fuel types, makers, colors, locations and vehicle types."""
    try:
        reference_data = await service.get_purchase_reference_data(db, user.company_id)
    except SQLAlchemyError as exc:
        logger.error(
            f"Purchase reference data failed for company {user.company_id}: {exc}",
            exc_info=True,
        )
        raise PersistenceError("Failed to fetch reference data") from exc
    return {"success": True, "referenceData": reference_data}
