"""
Ledger balance recomputation for inventory records.

A record carries three independent ordered lists of movements: receipts,
dispatches and returns. Each list keeps its own running quantity in insertion
order (entries are never re-sorted by date). A row only moves the balance once
it has both a date and a positive quantity; half-filled rows stay in the list
with the running figures of the row above them.

Everything here is pure: inputs are never mutated and nothing raises on bad
input, so callers can simply re-run ``aggregate_ledger`` after every edit.
"""

from dataclasses import dataclass, replace
from datetime import date as date_type
from typing import Any, Iterable, Mapping

from fitout.core.money import parse_number

RECEIPTS = "receipts"
DISPATCHES = "dispatches"
RETURNS = "returns"
LEDGER_KINDS = (RECEIPTS, DISPATCHES, RETURNS)


def has_entry_date(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, date_type):
        return True
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


@dataclass(frozen=True)
class LedgerEntry:
    date: date_type | str | None = None
    quantity: Any = None
    unit: str = ""
    cumulative_quantity: float = 0.0
    cumulative_price: float = 0.0

    @classmethod
    def from_raw(cls, raw: Any) -> "LedgerEntry":
        if isinstance(raw, LedgerEntry):
            return raw
        if isinstance(raw, Mapping):
            return cls(
                date=raw.get("date"),
                quantity=raw.get("quantity"),
                unit=raw.get("unit") or "",
            )
        return cls(
            date=getattr(raw, "date", None),
            quantity=getattr(raw, "quantity", None),
            unit=getattr(raw, "unit", None) or "",
        )

    @property
    def parsed_quantity(self) -> float:
        return parse_number(self.quantity)

    @property
    def contributes(self) -> bool:
        return has_entry_date(self.date) and self.parsed_quantity > 0


@dataclass(frozen=True)
class LedgerSummary:
    receipts: tuple[LedgerEntry, ...]
    dispatches: tuple[LedgerEntry, ...]
    returns: tuple[LedgerEntry, ...]
    unit_price: float
    total_receipts: float
    total_dispatches: float
    total_returns: float
    current_stock: float
    current_value: float
    ignored_entries: int = 0

    def entries(self, kind: str) -> tuple[LedgerEntry, ...]:
        if kind not in LEDGER_KINDS:
            raise ValueError(f"Unknown ledger kind: {kind}")
        return getattr(self, kind)


def accumulate(entries: Iterable[Any], unit_price: float) -> tuple[tuple[LedgerEntry, ...], float, int]:
    """Attach running quantity/price to every entry of one list.

    Returns the new entries, the final running quantity and how many rows
    were skipped for missing date or non-positive quantity.
    """
    running = 0.0
    ignored = 0
    result: list[LedgerEntry] = []
    for raw in entries or ():
        entry = LedgerEntry.from_raw(raw)
        if entry.contributes:
            running += entry.parsed_quantity
        else:
            ignored += 1
        result.append(
            replace(
                entry,
                cumulative_quantity=running,
                cumulative_price=running * unit_price,
            )
        )
    return tuple(result), running, ignored


def aggregate_ledger(
    receipts: Iterable[Any] = (),
    dispatches: Iterable[Any] = (),
    returns: Iterable[Any] = (),
    unit_price: Any = 0,
) -> LedgerSummary:
    price = parse_number(unit_price)
    receipt_rows, total_receipts, ignored_receipts = accumulate(receipts, price)
    dispatch_rows, total_dispatches, ignored_dispatches = accumulate(dispatches, price)
    return_rows, total_returns, ignored_returns = accumulate(returns, price)

    current_stock = total_receipts - total_dispatches + total_returns
    return LedgerSummary(
        receipts=receipt_rows,
        dispatches=dispatch_rows,
        returns=return_rows,
        unit_price=price,
        total_receipts=total_receipts,
        total_dispatches=total_dispatches,
        total_returns=total_returns,
        current_stock=current_stock,
        current_value=current_stock * price,
        ignored_entries=ignored_receipts + ignored_dispatches + ignored_returns,
    )


def contributing_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    return [entry for entry in entries if entry.contributes]
