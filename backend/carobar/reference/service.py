"""Cached reference lists for forms that need many lookups at once.

Each list is cached under `<name>:<company_id>` (fuel types, being global,
under `fuel-types`) for `settings.reference_cache_ttl_seconds`. Controllers
name their list through `ReferenceDataConfig.cache_name` and drop the key
after every committed write.

Lists carry only the columns a form needs, not the full records.
"""

import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from carobar.config import settings
from carobar.models.color import Color
from carobar.models.counterparty import Counterparty
from carobar.models.country import Country
from carobar.models.fuel_type import FuelType
from carobar.models.location import Location
from carobar.models.maker import Maker
from carobar.models.vehicle_type import VehicleType
from carobar.utils.cache import get_or_fetch

logger = logging.getLogger(__name__)

# Cache names, also used as the `cache_name` of the matching controllers
COUNTRIES = "countries"
COUNTERPARTIES = "counterparties"
MAKERS = "makers"
COLORS = "colors"
LOCATIONS = "locations"
VEHICLE_TYPES = "vehicle-types"
CHART_OF_ACCOUNTS = "chart-of-accounts"

FUEL_TYPES_KEY = "fuel-types"


def reference_cache_key(name: str, company_id: str) -> str:
    return f"{name}:{company_id}"


async def _cached_rows(db: AsyncSession, key: str, query: Select) -> list[dict[str, Any]]:
    async def fetch():
        result = await db.execute(query)
        return jsonable_encoder([dict(row._mapping) for row in result])

    return await get_or_fetch(key, fetch, ttl=settings.reference_cache_ttl_seconds)


async def get_countries(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        reference_cache_key(COUNTRIES, company_id),
        select(Country.code, Country.name, Country.is_targetcountry)
        .where(Country.company_id == company_id)
        .order_by(Country.name.asc(), Country.code.asc()),
    )


async def get_counterparties(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    """Active counterparties first, then by name."""
    return await _cached_rows(
        db,
        reference_cache_key(COUNTERPARTIES, company_id),
        select(
            Counterparty.code,
            Counterparty.name,
            Counterparty.is_supplier,
            Counterparty.is_buyer,
            Counterparty.address1,
            Counterparty.phone,
        )
        .where(Counterparty.company_id == company_id)
        .order_by(Counterparty.is_active.desc(), Counterparty.name.asc(), Counterparty.code.asc()),
    )


async def get_makers(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        reference_cache_key(MAKERS, company_id),
        select(Maker.name).where(Maker.company_id == company_id).order_by(Maker.name.asc()),
    )


async def get_colors(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        reference_cache_key(COLORS, company_id),
        select(Color.color).where(Color.company_id == company_id).order_by(Color.color.asc()),
    )


async def get_locations(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        reference_cache_key(LOCATIONS, company_id),
        select(Location.name)
        .where(Location.company_id == company_id)
        .order_by(Location.name.asc()),
    )


async def get_vehicle_types(db: AsyncSession, company_id: str) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        reference_cache_key(VEHICLE_TYPES, company_id),
        select(VehicleType.vehicle_type)
        .where(VehicleType.company_id == company_id)
        .order_by(VehicleType.vehicle_type.asc()),
    )


async def get_fuel_types(db: AsyncSession) -> list[dict[str, Any]]:
    return await _cached_rows(
        db,
        FUEL_TYPES_KEY,
        select(FuelType.name, FuelType.description).order_by(FuelType.name.asc()),
    )


async def get_purchase_reference_data(db: AsyncSession, company_id: str) -> dict[str, Any]:
    """Every lookup the purchase form needs, in one call.

    Only suppliers are offered as counterparties. The lists are read one
    after another because an AsyncSession runs one statement at a time.
    """
    logger.debug(f"Loading purchase reference data for company: {company_id}")
    counterparties = await get_counterparties(db, company_id)
    return {
        "countries": await get_countries(db, company_id),
        "counterparties": [c for c in counterparties if c["is_supplier"]],
        "fuelTypes": await get_fuel_types(db),
        "makers": await get_makers(db, company_id),
        "colors": await get_colors(db, company_id),
        "locations": await get_locations(db, company_id),
        "vehicleTypes": await get_vehicle_types(db, company_id),
    }
