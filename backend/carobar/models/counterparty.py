"""Counterparty: any external party the dealership trades with.

One table covers suppliers, buyers, repair shops, local transporters,
shippers and journal parties; the `is_*` flags say which roles a party
plays. Purchases and sales reference it by `(company_id, code)`.
"""

from sqlalchemy import Boolean, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from carobar.database import Base
from carobar.models.audit import AuditMixin


class Counterparty(AuditMixin, Base):
    __tablename__ = "ref_contact"
    __table_args__ = (PrimaryKeyConstraint("company_id", "code", name="pk_ref_contact"),)

    code: Mapped[str] = mapped_column(String(25), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100))
    address1: Mapped[str | None] = mapped_column(String(255))
    address2: Mapped[str | None] = mapped_column(String(255))
    address3: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(25))
    mobile: Mapped[str | None] = mapped_column(String(25))
    fax: Mapped[str | None] = mapped_column(String(25))
    email: Mapped[str | None] = mapped_column(String(50))
    is_active: Mapped[bool | None] = mapped_column(Boolean, default=True)
    comment: Mapped[str | None] = mapped_column(String(255))

    # Roles
    is_supplier: Mapped[bool | None] = mapped_column(Boolean, default=False)
    is_buyer: Mapped[bool | None] = mapped_column(Boolean, default=False)
    is_repair: Mapped[bool | None] = mapped_column(Boolean, default=False)
    is_localtransport: Mapped[bool | None] = mapped_column(Boolean, default=False)
    is_shipper: Mapped[bool | None] = mapped_column(Boolean, default=False)
    is_journal: Mapped[bool | None] = mapped_column(Boolean, default=False)
