from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Location(AuditMixin, Base):
    """Yard or storage site where vehicles are kept."""

    __tablename__ = "ref_location"
    __table_args__ = (PrimaryKeyConstraint("company_id", "name", name="pk_ref_location"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
