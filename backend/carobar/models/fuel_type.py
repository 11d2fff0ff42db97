"""Fuel type: a global lookup shared by every company (PETROL, DIESEL, …)."""

from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base


class FuelType(Base):
    __tablename__ = "ref_fueltype"
    __table_args__ = (PrimaryKeyConstraint("name", name="pk_fueltype"),)

    name: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[str | None] = mapped_column(String(50))
