"""Chart of accounts: one ledger account per (company, account_code)."""

from sqlalchemy import Boolean, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class ChartOfAccount(AuditMixin, Base):
    __tablename__ = "ref_coa"
    __table_args__ = (
        PrimaryKeyConstraint("company_id", "account_code", name="pk_ref_coa"),
    )

    account_code: Mapped[str] = mapped_column(String(50), nullable=False)
    account_name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[str] = mapped_column(String(50), nullable=False)  # ASSET, LIABILITY, INCOME, …
    description: Mapped[str | None] = mapped_column(String(250))
    is_active: Mapped[bool | None] = mapped_column(Boolean, default=True)
