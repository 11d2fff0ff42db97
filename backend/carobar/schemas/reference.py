"""Pydantic schemas validating one reference-data record.

Each schema is the body of POST and the `new<Entity>` part of PUT. The key
field is required; audit and tenant columns are never taken from the client
(unknown keys are ignored).
"""

from pydantic import BaseModel, Field


class ColorIn(BaseModel):
    color: str = Field(..., min_length=1, max_length=50)


class MakerIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CountryIn(BaseModel):
    code: str = Field(..., min_length=2, max_length=3)
    name: str = Field(..., min_length=1, max_length=100)
    is_targetcountry: bool = False


class LocationIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class VehicleTypeIn(BaseModel):
    vehicle_type: str = Field(..., min_length=1, max_length=100)


class BankIn(BaseModel):
    account_number: str = Field(..., min_length=1, max_length=30)
    bank_name: str = Field(..., min_length=1, max_length=100)
    bank_branch: str | None = Field(None, max_length=100)
    currency: str | None = Field(None, max_length=3)
    description: str | None = Field(None, max_length=500)
    is_default: bool | None = None
    is_active: bool | None = None


class ChartOfAccountIn(BaseModel):
    account_code: str = Field(..., min_length=1, max_length=50)
    account_name: str = Field(..., min_length=1, max_length=100)
    account_type: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=250)
    is_active: bool | None = True


class CounterpartyIn(BaseModel):
    code: str = Field(..., min_length=1, max_length=25)
    name: str | None = Field(None, max_length=100)
    address1: str | None = Field(None, max_length=255)
    address2: str | None = Field(None, max_length=255)
    address3: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=25)
    mobile: str | None = Field(None, max_length=25)
    fax: str | None = Field(None, max_length=25)
    email: str | None = Field(None, max_length=50)
    is_active: bool | None = True
    comment: str | None = Field(None, max_length=255)
    is_supplier: bool | None = False
    is_buyer: bool | None = False
    is_repair: bool | None = False
    is_localtransport: bool | None = False
    is_shipper: bool | None = False
    is_journal: bool | None = False
