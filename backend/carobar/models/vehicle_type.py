from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class VehicleType(AuditMixin, Base):
    __tablename__ = "ref_vehicle_type"
    __table_args__ = (
        PrimaryKeyConstraint("company_id", "vehicle_type", name="pk_vehicle_type"),
    )

    vehicle_type: Mapped[str] = mapped_column(String(100), nullable=False)
