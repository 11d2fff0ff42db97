"""Counterparty router.

Endpoints:
    GET    /api/counterparties            List counterparties (by name)
    POST   /api/counterparties            Create counterparty
    PUT    /api/counterparties            Rename / edit counterparty
    DELETE /api/counterparties?code=X     Delete, refused while used in transactions
"""

import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.auth.deps import AuthUser, get_current_user
from carobar.database import get_db
from carobar.middleware.exceptions import ConflictError, PersistenceError
from carobar.reference.entities import counterparty_controller
from carobar.utils.locks import counterparty_usage

logger = logging.getLogger(__name__)

router = counterparty_controller.build_router(operations=("read", "create", "update"))


@router.delete("")
async def delete_counterparty(
    code: str | None = None,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
):
    """Delete a counterparty unless a purchase or sale references it."""
    counterparty_controller.authorize("delete", user)

    if code:
        try:
            usage = await counterparty_usage(db, user.company_id, code)
        except SQLAlchemyError as exc:
            logger.error(
                f"Usage check failed for counterparty {code} (company {user.company_id}): {exc}",
                exc_info=True,
            )
            raise PersistenceError("Failed to delete counterparty") from exc

        if usage.in_use:
            logger.warning(
                f"Counterparty {code} still referenced by {usage.purchases} purchase(s) "
                f"and {usage.sales} sale(s) for company {user.company_id}"
            )
            raise ConflictError("This counterparty is used in transactions and cannot be deleted")

    result = await counterparty_controller.delete_record(db, user, code)
    await counterparty_controller.commit_and_invalidate(db, user)
    return result
