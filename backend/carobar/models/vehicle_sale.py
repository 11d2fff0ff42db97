from sqlalchemy import (
    Boolean,
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


class VehicleSale(AuditMixin, Base):
    __tablename__ = "vehicle_sales"
    __table_args__ = (
        PrimaryKeyConstraint("company_id", "chassis_no", name="pk_sales"),
        ForeignKeyConstraint(
            ["company_id", "buyer_code"],
            ["ref_contact.company_id", "ref_contact.code"],
            name="fk_sales_buyer",
            ondelete="RESTRICT",
            onupdate="RESTRICT",
        ),
        Index("ix_vehicle_sales_buyer", "company_id", "buyer_code"),
    )

    chassis_no: Mapped[str] = mapped_column(String(50), nullable=False)
    sales_date: Mapped[int] = mapped_column(Integer, nullable=False)  # YYYYMMDD
    buyer_code: Mapped[str] = mapped_column(String(25), nullable=False)
    buyer_name: Mapped[str | None] = mapped_column(String(100))
    selling_price: Mapped[float | None] = mapped_column(Float, default=0)
    currency: Mapped[str | None] = mapped_column(String(3))
    remarks: Mapped[str | None] = mapped_column(String(500))
    payment_received: Mapped[bool | None] = mapped_column(Boolean)
