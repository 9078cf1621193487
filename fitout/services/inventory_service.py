from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from fitout.core.money import to_money, to_quantity
from fitout.models.inventory import InventoryLedgerEntry, InventoryRecord
from fitout.schemas.inventory import (
    ALLOWED_LEDGER_UNITS,
    InventoryIn,
    InventoryOut,
    LedgerEntryOut,
)
from fitout.schemas.part import ScopeOfWork
from fitout.services.inventory_form import InventoryLedgerForm, SubmittedEntry
from fitout.services.ledger_service import DISPATCHES, LEDGER_KINDS, RECEIPTS, RETURNS

ENTRY_KIND_BY_LIST = {
    RECEIPTS: "receipt",
    DISPATCHES: "dispatch",
    RETURNS: "return",
}
ALLOWED_SCOPES_OF_WORK = set(ScopeOfWork.__args__)


def form_from_payload(payload: InventoryIn) -> InventoryLedgerForm:
    return InventoryLedgerForm(
        scope_of_work=payload.scope_of_work,
        part_name=payload.part_name,
        part_price=payload.part_price,
        date_of_receipt=payload.date_of_receipt,
        remarks=payload.remarks,
        receipts=[row.model_dump() for row in payload.receipts],
        dispatches=[row.model_dump() for row in payload.dispatches],
        returns=[row.model_dump() for row in payload.returns],
    )


def validate_inventory_form(form: InventoryLedgerForm, *, is_new: bool) -> list[dict]:
    errors = form.validate(is_new=is_new)

    scope = (form.scope_of_work or "").strip()
    if scope and scope not in ALLOWED_SCOPES_OF_WORK:
        errors["scope_of_work"] = "Unknown scope of work"

    for kind in LEDGER_KINDS:
        for index, entry in enumerate(getattr(form, kind)):
            unit = (entry.unit or "").strip()
            if unit and unit not in ALLOWED_LEDGER_UNITS:
                errors[f"{kind}.{index}.unit"] = "Unit must be one of: metres, nos"

    return [
        {"field": field, "message": message, "type": "value_error"}
        for field, message in errors.items()
    ]


def _entry_rows(inventory_id: str, kind: str, entries: list[SubmittedEntry]) -> list[InventoryLedgerEntry]:
    return [
        InventoryLedgerEntry(
            inventory_id=inventory_id,
            kind=ENTRY_KIND_BY_LIST[kind],
            position=position,
            entry_date=entry.date,
            unit=entry.unit,
            quantity=to_quantity(entry.quantity),
            total=to_money(entry.total) if entry.total is not None else None,
            cumulative_quantity=to_quantity(entry.cumulative_quantity),
            cumulative_price=to_money(entry.cumulative_price),
        )
        for position, entry in enumerate(entries)
    ]


def save_inventory(
    db: Session,
    form: InventoryLedgerForm,
    *,
    record: InventoryRecord | None = None,
) -> InventoryRecord:
    """Persist the contributing rows of ``form``; replaces any existing ledger rows."""
    submission = form.to_submission()

    if record is None:
        record = InventoryRecord()
        db.add(record)
    record.scope_of_work = submission.scope_of_work
    record.part_name = submission.part_name
    record.part_price = to_money(submission.part_price)
    record.date_of_receipt = submission.date_of_receipt
    record.remarks = submission.remarks
    record.cumulative_quantity = to_quantity(submission.cumulative_quantity)
    record.cumulative_price_value = to_money(submission.cumulative_price_value)
    db.flush()

    db.execute(delete(InventoryLedgerEntry).where(InventoryLedgerEntry.inventory_id == record.id))
    for kind in LEDGER_KINDS:
        db.add_all(_entry_rows(record.id, kind, getattr(submission, kind)))
    return record


def delete_inventory(db: Session, record: InventoryRecord) -> None:
    db.execute(delete(InventoryLedgerEntry).where(InventoryLedgerEntry.inventory_id == record.id))
    db.delete(record)


def load_entries(db: Session, inventory_id: str) -> dict[str, list[InventoryLedgerEntry]]:
    rows = db.execute(
        select(InventoryLedgerEntry)
        .where(InventoryLedgerEntry.inventory_id == inventory_id)
        .order_by(InventoryLedgerEntry.position.asc())
    ).scalars().all()
    grouped: dict[str, list[InventoryLedgerEntry]] = {kind: [] for kind in LEDGER_KINDS}
    list_by_kind = {value: key for key, value in ENTRY_KIND_BY_LIST.items()}
    for row in rows:
        grouped[list_by_kind[row.kind]].append(row)
    return grouped


def _entry_out(row: InventoryLedgerEntry) -> LedgerEntryOut:
    return LedgerEntryOut(
        id=row.id,
        date=row.entry_date,
        unit=row.unit,
        quantity=float(row.quantity),
        total=float(row.total) if row.total is not None else None,
        cumulative_quantity=float(row.cumulative_quantity),
        cumulative_price=float(row.cumulative_price),
    )


def inventory_out(db: Session, record: InventoryRecord) -> InventoryOut:
    entries = load_entries(db, record.id)
    return InventoryOut(
        id=record.id,
        scope_of_work=record.scope_of_work,
        part_name=record.part_name,
        part_price=float(record.part_price),
        date_of_receipt=record.date_of_receipt,
        remarks=record.remarks,
        receipts=[_entry_out(row) for row in entries[RECEIPTS]],
        dispatches=[_entry_out(row) for row in entries[DISPATCHES]],
        returns=[_entry_out(row) for row in entries[RETURNS]],
        cumulative_quantity=float(record.cumulative_quantity),
        cumulative_price_value=float(record.cumulative_price_value),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
