"""Bank account held by a company (source of payments and receipts)."""

from sqlalchemy import Boolean, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Bank(AuditMixin, Base):
    __tablename__ = "ref_bank"
    __table_args__ = (
        PrimaryKeyConstraint("company_id", "account_number", name="pk_ref_bank"),
    )

    account_number: Mapped[str] = mapped_column(String(30), nullable=False)
    bank_name: Mapped[str] = mapped_column(String(100), nullable=False)
    bank_branch: Mapped[str | None] = mapped_column(String(100))
    currency: Mapped[str | None] = mapped_column(String(3))
    description: Mapped[str | None] = mapped_column(String(500))
    is_default: Mapped[bool | None] = mapped_column(Boolean)
    is_active: Mapped[bool | None] = mapped_column(Boolean)
