"""Aggregate model imports for Alembic auto-detection."""

# Reference data
from carobar.models.bank import Bank  # noqa: F401
from carobar.models.chart_of_account import ChartOfAccount  # noqa: F401
from carobar.models.color import Color  # noqa: F401
from carobar.models.counterparty import Counterparty  # noqa: F401
from carobar.models.country import Country  # noqa: F401
from carobar.models.location import Location  # noqa: F401
from carobar.models.maker import Maker  # noqa: F401
from carobar.models.vehicle_type import VehicleType  # noqa: F401

# Global lookups (not tenant-scoped)
from carobar.models.fuel_type import FuelType  # noqa: F401

# Transactions (referenced by the counterparty in-use guard)
from carobar.models.vehicle_purchase import VehiclePurchase  # noqa: F401
from carobar.models.vehicle_sale import VehicleSale  # noqa: F401
