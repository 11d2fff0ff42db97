from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Color(AuditMixin, Base):
    __tablename__ = "ref_color"
    __table_args__ = (PrimaryKeyConstraint("company_id", "color", name="pk_color"),)

    color: Mapped[str] = mapped_column(String(50), nullable=False)
