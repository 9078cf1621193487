"""
Editing session for one inventory record's ledger.

Every mutating method rebuilds ``summary`` from scratch with
``aggregate_ledger``; there is no incremental update to keep consistent.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from fitout.core.config import settings
from fitout.core.money import (
    MAX_ENTRY_QUANTITY,
    MAX_PART_PRICE,
    MAX_RUNNING_QUANTITY,
    MAX_RUNNING_VALUE,
    parse_number,
)
from fitout.services.ledger_service import (
    LEDGER_KINDS,
    RECEIPTS,
    LedgerEntry,
    LedgerSummary,
    aggregate_ledger,
    contributing_entries,
    has_entry_date,
)

EDITABLE_ENTRY_FIELDS = {"date", "quantity", "unit"}


def parse_entry_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not has_entry_date(value):
        return None
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class SubmittedEntry:
    date: date
    quantity: float
    unit: str
    cumulative_quantity: float
    cumulative_price: float
    total: float | None = None


@dataclass(frozen=True)
class InventorySubmission:
    scope_of_work: str
    part_name: str
    part_price: float
    date_of_receipt: date | None
    remarks: str | None
    receipts: list[SubmittedEntry]
    dispatches: list[SubmittedEntry]
    returns: list[SubmittedEntry]
    cumulative_quantity: float
    cumulative_price_value: float


@dataclass
class InventoryLedgerForm:
    scope_of_work: str = ""
    part_name: str = ""
    part_price: Any = ""
    date_of_receipt: Any = ""
    remarks: str | None = None
    receipts: list[LedgerEntry] = field(default_factory=list)
    dispatches: list[LedgerEntry] = field(default_factory=list)
    returns: list[LedgerEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        for kind in LEDGER_KINDS:
            setattr(self, kind, [LedgerEntry.from_raw(raw) for raw in getattr(self, kind) or []])
        self._summary = aggregate_ledger([], [], [], 0)
        self.recalculate()

    @property
    def summary(self) -> LedgerSummary:
        return self._summary

    def _rows(self, kind: str) -> list[LedgerEntry]:
        if kind not in LEDGER_KINDS:
            raise ValueError(f"Unknown ledger kind: {kind}")
        return getattr(self, kind)

    def recalculate(self) -> LedgerSummary:
        self._summary = aggregate_ledger(
            self.receipts,
            self.dispatches,
            self.returns,
            self.part_price,
        )
        for kind in LEDGER_KINDS:
            setattr(self, kind, list(self._summary.entries(kind)))
        return self._summary

    def add_row(self, kind: str, today: date | None = None) -> LedgerEntry:
        rows = self._rows(kind)
        if kind == RECEIPTS:
            row = LedgerEntry(
                date=(today or date.today()).isoformat(),
                quantity="",
                unit=settings.default_ledger_unit,
            )
        else:
            row = LedgerEntry(date="", quantity="", unit="")
        rows.append(row)
        self.recalculate()
        return self._rows(kind)[-1]

    def update_entry(self, kind: str, index: int, **changes: Any) -> LedgerEntry:
        unknown = set(changes) - EDITABLE_ENTRY_FIELDS
        if unknown:
            raise ValueError(f"Unknown ledger entry fields: {', '.join(sorted(unknown))}")
        rows = self._rows(kind)
        rows[index] = replace(rows[index], **changes)
        self.recalculate()
        return self._rows(kind)[index]

    def remove_row(self, kind: str, index: int) -> None:
        rows = self._rows(kind)
        del rows[index]
        self.recalculate()

    def set_unit_price(self, price: Any) -> None:
        self.part_price = price
        self.recalculate()

    def validate(self, *, is_new: bool = True) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not (self.scope_of_work or "").strip():
            errors["scope_of_work"] = "Scope of work is required"
        if not (self.part_name or "").strip():
            errors["part_name"] = "Part name is required"
        price = parse_number(self.part_price)
        if price <= 0:
            errors["part_price"] = "Valid part price is required"
        elif price > MAX_PART_PRICE:
            errors["part_price"] = "Part price is too large"
        if parse_entry_date(self.date_of_receipt) is None:
            errors["date_of_receipt"] = "Date of receipt is required"

        if is_new and not contributing_entries(self.receipts):
            errors["receipts"] = "At least one valid receipt is required"

        for kind in LEDGER_KINDS:
            for index, entry in enumerate(self._rows(kind)):
                touched = has_entry_date(entry.date) or str(entry.quantity or "").strip()
                if not touched:
                    continue
                if parse_entry_date(entry.date) is None:
                    errors[f"{kind}.{index}.date"] = "Date is required"
                if entry.parsed_quantity <= 0:
                    errors[f"{kind}.{index}.quantity"] = "Valid quantity is required"
                elif entry.parsed_quantity > MAX_ENTRY_QUANTITY:
                    errors[f"{kind}.{index}.quantity"] = "Quantity is too large"

        summary = self.recalculate()
        for kind in LEDGER_KINDS:
            running = getattr(summary, f"total_{kind}")
            if running > MAX_RUNNING_QUANTITY or abs(running * summary.unit_price) > MAX_RUNNING_VALUE:
                errors.setdefault(kind, "Running totals are too large to store")
        if (
            abs(summary.current_stock) > MAX_RUNNING_QUANTITY
            or abs(summary.current_value) > MAX_RUNNING_VALUE
        ):
            errors["cumulative_quantity"] = "Stock balance is too large to store"
        return errors

    def to_submission(self) -> InventorySubmission:
        summary = self.recalculate()
        price = summary.unit_price

        def _submitted(kind: str) -> list[SubmittedEntry]:
            rows = []
            for entry in contributing_entries(summary.entries(kind)):
                entry_date = parse_entry_date(entry.date)
                if entry_date is None:
                    continue
                quantity = entry.parsed_quantity
                rows.append(
                    SubmittedEntry(
                        date=entry_date,
                        quantity=quantity,
                        unit=(entry.unit or "").strip() or settings.default_ledger_unit,
                        cumulative_quantity=entry.cumulative_quantity,
                        cumulative_price=entry.cumulative_price,
                        total=quantity * price if kind == RECEIPTS else None,
                    )
                )
            return rows

        return InventorySubmission(
            scope_of_work=(self.scope_of_work or "").strip(),
            part_name=(self.part_name or "").strip(),
            part_price=price,
            date_of_receipt=parse_entry_date(self.date_of_receipt),
            remarks=(self.remarks or "").strip() or None,
            receipts=_submitted("receipts"),
            dispatches=_submitted("dispatches"),
            returns=_submitted("returns"),
            cumulative_quantity=summary.current_stock,
            cumulative_price_value=summary.current_value,
        )
