from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fitout.core.api_docs import error_responses
from fitout.core.config import settings
from fitout.core.deps import get_db
from fitout.core.observability import bind_request_fields, log_event
from fitout.models.inventory import InventoryRecord
from fitout.schemas.common import DeleteOut, PaginationMeta
from fitout.schemas.inventory import (
    BalanceDisplayOut,
    BalancePreviewIn,
    BalancePreviewOut,
    InventoryIn,
    InventoryListOut,
    InventoryOut,
    InventorySummaryOut,
    PreviewRowOut,
)
from fitout.schemas.part import ScopeOfWork
from fitout.services.balance_presenter import present_balance
from fitout.services.inventory_service import (
    delete_inventory,
    form_from_payload,
    inventory_out,
    save_inventory,
    validate_inventory_form,
)
from fitout.services.ledger_service import LedgerEntry, aggregate_ledger

router = APIRouter(prefix="/inventory", tags=["inventory"])
MAX_INVENTORY_PAGE_SIZE = 200


def _get_inventory(db: Session, inventory_id: str) -> InventoryRecord:
    record = db.execute(
        select(InventoryRecord).where(InventoryRecord.id == inventory_id)
    ).scalar_one_or_none()
    if not record:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return record


def _preview_row(entry: LedgerEntry) -> PreviewRowOut:
    return PreviewRowOut(
        date=str(entry.date) if entry.date is not None else None,
        quantity=entry.parsed_quantity,
        unit=entry.unit,
        contributes=entry.contributes,
        cumulative_quantity=entry.cumulative_quantity,
        cumulative_price=entry.cumulative_price,
    )


@router.get(
    "",
    response_model=InventoryListOut,
    summary="List inventory items",
    responses=error_responses(422, 500),
)
def list_inventory(
    scope_of_work: ScopeOfWork | None = Query(default=None),
    part_name: str | None = Query(default=None, description="Case-insensitive part name search"),
    limit: int | None = Query(default=None, ge=1, le=MAX_INVENTORY_PAGE_SIZE, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    db: Session = Depends(get_db),
):
    limit = limit or settings.default_page_size
    conditions = []
    if scope_of_work:
        conditions.append(InventoryRecord.scope_of_work == scope_of_work)
    if part_name and part_name.strip():
        conditions.append(func.lower(InventoryRecord.part_name).contains(part_name.strip().lower()))

    total = int(
        db.execute(select(func.count(InventoryRecord.id)).where(*conditions)).scalar_one()
    )
    rows = db.execute(
        select(InventoryRecord)
        .where(*conditions)
        .order_by(InventoryRecord.created_at.desc())
        .offset(offset)
        .limit(limit)
    ).scalars().all()
    items = [
        InventorySummaryOut(
            id=row.id,
            scope_of_work=row.scope_of_work,
            part_name=row.part_name,
            part_price=float(row.part_price),
            date_of_receipt=row.date_of_receipt,
            cumulative_quantity=float(row.cumulative_quantity),
            cumulative_price_value=float(row.cumulative_price_value),
            created_at=row.created_at,
        )
        for row in rows
    ]
    count = len(items)
    return InventoryListOut(
        items=items,
        pagination=PaginationMeta(
            total=total,
            limit=limit,
            offset=offset,
            count=count,
            has_next=(offset + count) < total,
        ),
    )


@router.post(
    "/balance-preview",
    response_model=BalancePreviewOut,
    summary="Recompute ledger balance without saving",
    responses=error_responses(422, 500),
)
def preview_balance(payload: BalancePreviewIn):
    summary = aggregate_ledger(
        [row.model_dump() for row in payload.receipts],
        [row.model_dump() for row in payload.dispatches],
        [row.model_dump() for row in payload.returns],
        payload.unit_price,
    )
    bind_request_fields(
        ignored_entries=summary.ignored_entries,
        current_stock=summary.current_stock,
    )
    return BalancePreviewOut(
        receipts=[_preview_row(entry) for entry in summary.receipts],
        dispatches=[_preview_row(entry) for entry in summary.dispatches],
        returns=[_preview_row(entry) for entry in summary.returns],
        unit_price=summary.unit_price,
        total_receipts=summary.total_receipts,
        total_dispatches=summary.total_dispatches,
        total_returns=summary.total_returns,
        current_stock=summary.current_stock,
        current_value=summary.current_value,
        ignored_entries=summary.ignored_entries,
        display=BalanceDisplayOut(**present_balance(summary)),
    )


@router.get(
    "/{inventory_id}",
    response_model=InventoryOut,
    summary="Get inventory item with its ledger",
    responses=error_responses(404, 422, 500),
)
def get_inventory(inventory_id: str, db: Session = Depends(get_db)):
    return inventory_out(db, _get_inventory(db, inventory_id))


@router.post(
    "",
    response_model=InventoryOut,
    status_code=201,
    summary="Create inventory item",
    responses=error_responses(422, 500),
)
def create_inventory(payload: InventoryIn, db: Session = Depends(get_db)):
    form = form_from_payload(payload)
    errors = validate_inventory_form(form, is_new=True)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    record = save_inventory(db, form)
    db.commit()
    db.refresh(record)
    log_event(
        "inventory.create",
        inventory_id=record.id,
        current_stock=float(record.cumulative_quantity),
        ignored_entries=form.summary.ignored_entries,
    )
    return inventory_out(db, record)


@router.put(
    "/{inventory_id}",
    response_model=InventoryOut,
    summary="Update inventory item and replace its ledger",
    responses=error_responses(404, 422, 500),
)
def update_inventory(inventory_id: str, payload: InventoryIn, db: Session = Depends(get_db)):
    record = _get_inventory(db, inventory_id)
    form = form_from_payload(payload)
    errors = validate_inventory_form(form, is_new=False)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    save_inventory(db, form, record=record)
    db.commit()
    db.refresh(record)
    log_event(
        "inventory.update",
        inventory_id=record.id,
        current_stock=float(record.cumulative_quantity),
        ignored_entries=form.summary.ignored_entries,
    )
    return inventory_out(db, record)


@router.delete(
    "/{inventory_id}",
    response_model=DeleteOut,
    summary="Delete inventory item",
    responses=error_responses(404, 422, 500),
)
def remove_inventory(inventory_id: str, db: Session = Depends(get_db)):
    record = _get_inventory(db, inventory_id)
    delete_inventory(db, record)
    db.commit()
    log_event("inventory.delete", inventory_id=inventory_id)
    return DeleteOut(message="Inventory item deleted successfully")
