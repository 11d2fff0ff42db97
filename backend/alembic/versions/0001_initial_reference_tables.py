"""Initial reference tables plus the purchase / sales tables that reference counterparties.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("company_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("created_by", sa.String(50)),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_by", sa.String(50)),
    ]


def upgrade() -> None:
    op.create_table(
        "ref_color",
        *_audit_columns(),
        sa.Column("color", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("company_id", "color", name="pk_color"),
    )
    op.create_table(
        "ref_maker",
        *_audit_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("company_id", "name", name="pk_ref_maker"),
    )
    op.create_table(
        "ref_country",
        *_audit_columns(),
        sa.Column("code", sa.String(3), nullable=False),
        sa.Column("name", sa.String(100)),
        sa.Column("is_targetcountry", sa.Boolean, server_default=sa.false()),
        sa.PrimaryKeyConstraint("company_id", "code", name="pk_ref_country"),
    )
    op.create_table(
        "ref_location",
        *_audit_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("company_id", "name", name="pk_ref_location"),
    )
    op.create_table(
        "ref_vehicle_type",
        *_audit_columns(),
        sa.Column("vehicle_type", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("company_id", "vehicle_type", name="pk_vehicle_type"),
    )
    op.create_table(
        "ref_bank",
        *_audit_columns(),
        sa.Column("account_number", sa.String(30), nullable=False),
        sa.Column("bank_name", sa.String(100), nullable=False),
        sa.Column("bank_branch", sa.String(100)),
        sa.Column("currency", sa.String(3)),
        sa.Column("description", sa.String(500)),
        sa.Column("is_default", sa.Boolean),
        sa.Column("is_active", sa.Boolean),
        sa.PrimaryKeyConstraint("company_id", "account_number", name="pk_ref_bank"),
    )
    op.create_table(
        "ref_coa",
        *_audit_columns(),
        sa.Column("account_code", sa.String(50), nullable=False),
        sa.Column("account_name", sa.String(100), nullable=False),
        sa.Column("account_type", sa.String(50), nullable=False),
        sa.Column("description", sa.String(250)),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.PrimaryKeyConstraint("company_id", "account_code", name="pk_ref_coa"),
    )
    op.create_table(
        "ref_contact",
        *_audit_columns(),
        sa.Column("code", sa.String(25), nullable=False),
        sa.Column("name", sa.String(100)),
        sa.Column("address1", sa.String(255)),
        sa.Column("address2", sa.String(255)),
        sa.Column("address3", sa.String(255)),
        sa.Column("phone", sa.String(25)),
        sa.Column("mobile", sa.String(25)),
        sa.Column("fax", sa.String(25)),
        sa.Column("email", sa.String(50)),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("comment", sa.String(255)),
        sa.Column("is_supplier", sa.Boolean, server_default=sa.false()),
        sa.Column("is_buyer", sa.Boolean, server_default=sa.false()),
        sa.Column("is_repair", sa.Boolean, server_default=sa.false()),
        sa.Column("is_localtransport", sa.Boolean, server_default=sa.false()),
        sa.Column("is_shipper", sa.Boolean, server_default=sa.false()),
        sa.Column("is_journal", sa.Boolean, server_default=sa.false()),
        sa.PrimaryKeyConstraint("company_id", "code", name="pk_ref_contact"),
    )

    # Transactions referencing counterparties
    op.create_table(
        "vehicle_purchase",
        *_audit_columns(),
        sa.Column("chassis_no", sa.String(50), nullable=False),
        sa.Column("purchase_date", sa.Integer, nullable=False),
        sa.Column("supplier_code", sa.String(25), nullable=False),
        sa.Column("supplier_name", sa.String(100)),
        sa.Column("currency", sa.String(3)),
        sa.Column("purchase_cost", sa.Float, server_default="0"),
        sa.Column("purchase_remarks", sa.String(255)),
        sa.PrimaryKeyConstraint("company_id", "chassis_no", name="pk_am_purchase"),
        sa.ForeignKeyConstraint(
            ["company_id", "supplier_code"],
            ["ref_contact.company_id", "ref_contact.code"],
            name="fk_purchase_supplier",
            ondelete="RESTRICT",
            onupdate="RESTRICT",
        ),
    )
    op.create_table(
        "vehicle_sales",
        *_audit_columns(),
        sa.Column("chassis_no", sa.String(50), nullable=False),
        sa.Column("sales_date", sa.Integer, nullable=False),
        sa.Column("buyer_code", sa.String(25), nullable=False),
        sa.Column("buyer_name", sa.String(100)),
        sa.Column("selling_price", sa.Float, server_default="0"),
        sa.Column("currency", sa.String(3)),
        sa.Column("remarks", sa.String(500)),
        sa.Column("payment_received", sa.Boolean),
        sa.PrimaryKeyConstraint("company_id", "chassis_no", name="pk_sales"),
        sa.ForeignKeyConstraint(
            ["company_id", "buyer_code"],
            ["ref_contact.company_id", "ref_contact.code"],
            name="fk_sales_buyer",
            ondelete="RESTRICT",
            onupdate="RESTRICT",
        ),
    )
    op.create_index("ix_vehicle_purchase_supplier", "vehicle_purchase", ["company_id", "supplier_code"])
    op.create_index("ix_vehicle_sales_buyer", "vehicle_sales", ["company_id", "buyer_code"])


def downgrade() -> None:
    op.drop_index("ix_vehicle_sales_buyer", table_name="vehicle_sales")
    op.drop_index("ix_vehicle_purchase_supplier", table_name="vehicle_purchase")
    op.drop_table("vehicle_sales")
    op.drop_table("vehicle_purchase")
    for table in (
        "ref_contact", "ref_coa", "ref_bank", "ref_vehicle_type",
        "ref_location", "ref_country", "ref_maker", "ref_color",
    ):
        op.drop_table(table)
