"""Downstream locking: block deletion of reference rows still in use.

Check functions return a UsageInfo describing what references a record,
without raising. The caller (router) decides whether to refuse the request.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.models.vehicle_purchase import VehiclePurchase
from carobar.models.vehicle_sale import VehicleSale


@dataclass
class UsageInfo:
    """Reference counts per referencing table. All zero means unused."""
    purchases: int = 0
    sales: int = 0

    @property
    def in_use(self) -> bool:
        return self.purchases > 0 or self.sales > 0


async def counterparty_usage(db: AsyncSession, company_id: str, code: str) -> UsageInfo:
    """Count purchases supplied by and sales sold to a counterparty."""
    purchases = await db.scalar(
        select(func.count())
        .select_from(VehiclePurchase)
        .where(
            VehiclePurchase.company_id == company_id,
            VehiclePurchase.supplier_code == code,
        )
    )
    sales = await db.scalar(
        select(func.count())
        .select_from(VehicleSale)
        .where(
            VehicleSale.company_id == company_id,
            VehicleSale.buyer_code == code,
        )
    )
    return UsageInfo(purchases=purchases or 0, sales=sales or 0)
