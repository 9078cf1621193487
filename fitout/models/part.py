from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from fitout.core.id_utils import generate_shortuuid
from fitout.db.base import Base


class Part(Base):
    __tablename__ = "parts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_shortuuid)
    scope_of_work: Mapped[str] = mapped_column(String(30), nullable=False, index=True)  # "electrical", "cctv", ...
    part_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)  # "inhouse", "out_sourced", "bought_out"
    unit_type: Mapped[str] = mapped_column(String(20), nullable=False)  # "sq_feet", "number", "meter"
    part_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("ix_parts_scope_part_name", "scope_of_work", "part_name"),
    )
