"""Vehicle purchase: one row per chassis bought by a company.

Only the columns the reference-data side depends on are mapped in detail;
`supplier_code` is what keeps a counterparty from being deleted.
"""

from sqlalchemy import (
    Float,
    ForeignKeyConstraint,
    Index,
    Integer,
    PrimaryKeyConstraint,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class VehiclePurchase(AuditMixin, Base):
    __tablename__ = "vehicle_purchase"
    __table_args__ = (
        PrimaryKeyConstraint("company_id", "chassis_no", name="pk_am_purchase"),
        ForeignKeyConstraint(
            ["company_id", "supplier_code"],
            ["ref_contact.company_id", "ref_contact.code"],
            name="fk_purchase_supplier",
            ondelete="RESTRICT",
            onupdate="RESTRICT",
        ),
        Index("ix_vehicle_purchase_supplier", "company_id", "supplier_code"),
    )

    chassis_no: Mapped[str] = mapped_column(String(50), nullable=False)
    purchase_date: Mapped[int] = mapped_column(Integer, nullable=False)  # YYYYMMDD
    supplier_code: Mapped[str] = mapped_column(String(25), nullable=False)
    supplier_name: Mapped[str | None] = mapped_column(String(100))
    currency: Mapped[str | None] = mapped_column(String(3))
    purchase_cost: Mapped[float | None] = mapped_column(Float, default=0)
    purchase_remarks: Mapped[str | None] = mapped_column(String(255))
