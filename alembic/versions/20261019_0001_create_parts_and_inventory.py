"""create parts, inventory records and ledger entries

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("scope_of_work", sa.String(length=30), nullable=False),
        sa.Column("part_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("unit_type", sa.String(length=20), nullable=False),
        sa.Column("part_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_parts_scope_of_work"), "parts", ["scope_of_work"], unique=False)
    op.create_index("ix_parts_scope_part_name", "parts", ["scope_of_work", "part_name"], unique=False)

    op.create_table(
        "inventory_records",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("scope_of_work", sa.String(length=30), nullable=False),
        sa.Column("part_name", sa.String(length=255), nullable=False),
        sa.Column("part_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("date_of_receipt", sa.Date(), nullable=False),
        sa.Column("cumulative_quantity", sa.Numeric(14, 3), server_default="0", nullable=False),
        sa.Column("cumulative_price_value", sa.Numeric(16, 2), server_default="0", nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_inventory_records_scope_of_work"), "inventory_records", ["scope_of_work"], unique=False
    )
    op.create_index("ix_inventory_records_created_at", "inventory_records", ["created_at"], unique=False)

    op.create_table(
        "inventory_ledger_entries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("inventory_id", sa.String(length=36), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("unit", sa.String(length=20), server_default="nos", nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("total", sa.Numeric(16, 2), nullable=True),
        sa.Column("cumulative_quantity", sa.Numeric(14, 3), nullable=False),
        sa.Column("cumulative_price", sa.Numeric(16, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["inventory_id"], ["inventory_records.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_inventory_ledger_entries_inventory_id"),
        "inventory_ledger_entries",
        ["inventory_id"],
        unique=False,
    )
    op.create_index(
        "ix_inventory_ledger_entries_inventory_kind_position",
        "inventory_ledger_entries",
        ["inventory_id", "kind", "position"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_inventory_ledger_entries_inventory_kind_position", table_name="inventory_ledger_entries")
    op.drop_index(op.f("ix_inventory_ledger_entries_inventory_id"), table_name="inventory_ledger_entries")
    op.drop_table("inventory_ledger_entries")
    op.drop_index("ix_inventory_records_created_at", table_name="inventory_records")
    op.drop_index(op.f("ix_inventory_records_scope_of_work"), table_name="inventory_records")
    op.drop_table("inventory_records")
    op.drop_index("ix_parts_scope_part_name", table_name="parts")
    op.drop_index(op.f("ix_parts_scope_of_work"), table_name="parts")
    op.drop_table("parts")
