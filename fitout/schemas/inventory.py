from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fitout.schemas.common import PaginationMeta

LedgerUnit = Literal["nos", "metres"]
ALLOWED_LEDGER_UNITS = {"nos", "metres"}


class LedgerRowIn(BaseModel):
    """Raw form row. Partially filled rows are accepted and simply ignored by the math."""

    date: str | None = None
    quantity: float | str | None = None
    unit: str | None = None


class InventoryIn(BaseModel):
    scope_of_work: str = ""
    part_name: str = ""
    part_price: float | str | None = None
    date_of_receipt: str | None = None
    remarks: str | None = Field(default=None, max_length=2000)
    receipts: list[LedgerRowIn] = Field(default_factory=list)
    dispatches: list[LedgerRowIn] = Field(default_factory=list)
    returns: list[LedgerRowIn] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scope_of_work": "electrical",
                "part_name": "6A modular switch",
                "part_price": 85.0,
                "date_of_receipt": "2024-01-01",
                "remarks": "Tower B, level 3",
                "receipts": [{"date": "2024-01-01", "quantity": "20", "unit": "nos"}],
                "dispatches": [{"date": "2024-01-02", "quantity": "5", "unit": "nos"}],
                "returns": [{"date": "2024-01-03", "quantity": "2", "unit": "nos"}],
            }
        }
    )


class LedgerEntryOut(BaseModel):
    id: str
    date: date
    unit: str
    quantity: float
    total: float | None = None
    cumulative_quantity: float
    cumulative_price: float


class InventoryOut(BaseModel):
    id: str
    scope_of_work: str
    part_name: str
    part_price: float
    date_of_receipt: date
    remarks: str | None = None
    receipts: list[LedgerEntryOut]
    dispatches: list[LedgerEntryOut]
    returns: list[LedgerEntryOut]
    cumulative_quantity: float
    cumulative_price_value: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InventorySummaryOut(BaseModel):
    id: str
    scope_of_work: str
    part_name: str
    part_price: float
    date_of_receipt: date
    cumulative_quantity: float
    cumulative_price_value: float
    created_at: datetime | None = None


class InventoryListOut(BaseModel):
    items: list[InventorySummaryOut]
    pagination: PaginationMeta


class BalancePreviewIn(BaseModel):
    unit_price: float | str | None = None
    receipts: list[LedgerRowIn] = Field(default_factory=list)
    dispatches: list[LedgerRowIn] = Field(default_factory=list)
    returns: list[LedgerRowIn] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "unit_price": 10,
                "receipts": [
                    {"date": "2024-01-01", "quantity": "10"},
                    {"date": "", "quantity": "5"},
                ],
                "dispatches": [],
                "returns": [],
            }
        }
    )


class PreviewRowOut(BaseModel):
    date: str | None = None
    quantity: float
    unit: str
    contributes: bool
    cumulative_quantity: float
    cumulative_price: float


class BalanceDisplayOut(BaseModel):
    unit_price: str
    total_receipts: str
    total_dispatches: str
    total_returns: str
    current_stock: str
    current_value: str


class BalancePreviewOut(BaseModel):
    receipts: list[PreviewRowOut]
    dispatches: list[PreviewRowOut]
    returns: list[PreviewRowOut]
    unit_price: float
    total_receipts: float
    total_dispatches: float
    total_returns: float
    current_stock: float
    current_value: float
    ignored_entries: int
    display: BalanceDisplayOut
