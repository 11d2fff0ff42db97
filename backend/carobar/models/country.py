from sqlalchemy import Boolean, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Country(AuditMixin, Base):
    __tablename__ = "ref_country"
    __table_args__ = (PrimaryKeyConstraint("company_id", "code", name="pk_ref_country"),)

    code: Mapped[str] = mapped_column(String(3), nullable=False)  # ISO alpha-2 / alpha-3
    name: Mapped[str | None] = mapped_column(String(100))
    is_targetcountry: Mapped[bool | None] = mapped_column(Boolean, default=False)
