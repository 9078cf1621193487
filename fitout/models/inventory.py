from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from fitout.core.id_utils import generate_shortuuid
from fitout.db.base import Base


class InventoryRecord(Base):
    """
    One tracked part on site. Stock and value are derived from the ledger entries
    and rewritten on every save.
    """
    __tablename__ = "inventory_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_shortuuid)
    scope_of_work: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    part_name: Mapped[str] = mapped_column(String(255), nullable=False)
    part_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date_of_receipt: Mapped[date] = mapped_column(Date, nullable=False)

    cumulative_quantity: Mapped[Decimal] = mapped_column(
        Numeric(14, 3), nullable=False, default=0, server_default="0"
    )
    cumulative_price_value: Mapped[Decimal] = mapped_column(
        Numeric(16, 2), nullable=False, default=0, server_default="0"
    )
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("ix_inventory_records_created_at", "created_at"),
    )


class InventoryLedgerEntry(Base):
    """
    One persisted receipt, dispatch or return row. ``position`` keeps the order the
    rows were entered in, which is the order cumulative figures were computed in.
    """
    __tablename__ = "inventory_ledger_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_shortuuid)
    inventory_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("inventory_records.id", ondelete="CASCADE"), index=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)  # "receipt", "dispatch", "return"
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False, default="nos", server_default="nos")
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    total: Mapped[Optional[Decimal]] = mapped_column(Numeric(16, 2), nullable=True)  # receipts only
    cumulative_quantity: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False)
    cumulative_price: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_inventory_ledger_entries_inventory_kind_position", "inventory_id", "kind", "position"),
    )
