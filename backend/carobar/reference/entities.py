"""Concrete reference entities: one controller per table.

Each entry binds a mapped model, its validation schema and its key rules.
`CONTROLLERS` maps the URL slug to the controller so the app can mount the
plain entities in one place.
"""

from carobar.auth.roles import ALL_ROLES, MANAGEMENT
from carobar.models.bank import Bank
from carobar.models.chart_of_account import ChartOfAccount
from carobar.models.color import Color
from carobar.models.counterparty import Counterparty
from carobar.models.country import Country
from carobar.models.location import Location
from carobar.models.maker import Maker
from carobar.models.vehicle_type import VehicleType
from carobar.reference import service
from carobar.reference.controller import (
    AllowedRoles,
    PrimaryKey,
    ReferenceDataConfig,
    ReferenceDataController,
    create_reference_data_controller,
)
from carobar.schemas.reference import (
    BankIn,
    ChartOfAccountIn,
    ColorIn,
    CounterpartyIn,
    CountryIn,
    LocationIn,
    MakerIn,
    VehicleTypeIn,
)


# Anyone may add and rename; only management may remove.
MANAGEMENT_DELETES = AllowedRoles(
    read=ALL_ROLES, create=ALL_ROLES, update=ALL_ROLES, delete=MANAGEMENT
)


def keep_value(value: str) -> str:
    return value


def strip_value(value: str) -> str:
    return value.strip()


color_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Color,
        entity_name="Color",
        response_prop_name="colors",
        schema=ColorIn,
        primary_key=PrimaryKey(field="color", composite_name="pk_color"),
        allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        cache_name=service.COLORS,
    )
)

maker_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Maker,
        entity_name="Maker",
        response_prop_name="makers",
        schema=MakerIn,
        primary_key=PrimaryKey(field="name", composite_name="pk_ref_maker"),
        allowed_roles=MANAGEMENT_DELETES,
        cache_name=service.MAKERS,
    )
)

country_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Country,
        entity_name="Country",
        response_prop_name="countries",
        record_prop_name="country",
        schema=CountryIn,
        primary_key=PrimaryKey(field="code", composite_name="pk_ref_country"),
        order_by_field="name",
        allowed_roles=MANAGEMENT_DELETES,
        cache_name=service.COUNTRIES,
    )
)

location_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Location,
        entity_name="Location",
        response_prop_name="locations",
        schema=LocationIn,
        primary_key=PrimaryKey(field="name", composite_name="pk_ref_location"),
        allowed_roles=MANAGEMENT_DELETES,
        cache_name=service.LOCATIONS,
    )
)

# The dashboard sends oldVehicleType/newVehicleType; older clients send oldType/newType.
vehicle_type_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=VehicleType,
        entity_name="Type",
        response_prop_name="vehicleTypes",
        record_prop_name="vehicleType",
        schema=VehicleTypeIn,
        primary_key=PrimaryKey(field="vehicle_type", composite_name="pk_vehicle_type"),
        allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        body_aliases=("VehicleType",),
        cache_name=service.VEHICLE_TYPES,
    )
)

bank_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Bank,
        entity_name="Bank",
        response_prop_name="banks",
        schema=BankIn,
        primary_key=PrimaryKey(field="account_number", composite_name="pk_ref_bank"),
        allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        format_value=strip_value,
    )
)

counterparty_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=Counterparty,
        entity_name="Counterparty",
        response_prop_name="counterparties",
        record_prop_name="counterparty",
        schema=CounterpartyIn,
        primary_key=PrimaryKey(
            field="code", composite_name="pk_ref_contact", url_param_name="code"
        ),
        order_by_field="name",
        allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        format_value=keep_value,  # codes are stored exactly as entered
        cache_name=service.COUNTERPARTIES,
    )
)

chart_of_accounts_controller = create_reference_data_controller(
    ReferenceDataConfig(
        model=ChartOfAccount,
        entity_name="Account",
        response_prop_name="coa",
        record_prop_name="account",
        schema=ChartOfAccountIn,
        primary_key=PrimaryKey(
            field="account_code", composite_name="pk_ref_coa", url_param_name="code"
        ),
        order_by_field="account_code",
        allowed_roles=AllowedRoles.uniform(ALL_ROLES),
        cache_name=service.CHART_OF_ACCOUNTS,
    )
)


# Entities served by the generic handlers alone, keyed by URL slug.
CONTROLLERS: dict[str, ReferenceDataController] = {
    "colors": color_controller,
    "makers": maker_controller,
    "countries": country_controller,
    "locations": location_controller,
    "vehicle-types": vehicle_type_controller,
    "banks": bank_controller,
}
