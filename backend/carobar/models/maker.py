from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Maker(AuditMixin, Base):
    """Vehicle manufacturer (TOYOTA, NISSAN, …)."""

    __tablename__ = "ref_maker"
    __table_args__ = (PrimaryKeyConstraint("company_id", "name", name="pk_ref_maker"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
