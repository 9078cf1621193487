from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fitout.core.api_docs import error_responses
from fitout.core.config import settings
from fitout.core.deps import get_db
from fitout.core.money import to_money
from fitout.core.observability import log_event
from fitout.models.part import Part
from fitout.schemas.common import DeleteOut, PaginationMeta
from fitout.schemas.part import (
    PartCategory,
    PartCreate,
    PartListOut,
    PartOut,
    PartUpdate,
    ScopeOfWork,
)

router = APIRouter(prefix="/parts", tags=["parts"])
MAX_PART_PAGE_SIZE = 500


def _part_out(part: Part) -> PartOut:
    return PartOut(
        id=part.id,
        scope_of_work=part.scope_of_work,
        part_name=part.part_name,
        category=part.category,
        unit_type=part.unit_type,
        part_price=float(to_money(part.part_price)),
        created_at=part.created_at,
        updated_at=part.updated_at,
    )


def _get_part(db: Session, part_id: str) -> Part:
    part = db.execute(select(Part).where(Part.id == part_id)).scalar_one_or_none()
    if not part:
        raise HTTPException(status_code=404, detail="Part not found")
    return part


@router.get(
    "",
    response_model=PartListOut,
    summary="List parts",
    responses=error_responses(422, 500),
)
def list_parts(
    scope_of_work: ScopeOfWork | None = Query(default=None),
    category: PartCategory | None = Query(default=None),
    part_name: str | None = Query(default=None, description="Case-insensitive name search"),
    limit: int | None = Query(default=None, ge=1, le=MAX_PART_PAGE_SIZE, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    db: Session = Depends(get_db),
):
    limit = limit or settings.default_page_size
    conditions = []
    if scope_of_work:
        conditions.append(Part.scope_of_work == scope_of_work)
    if category:
        conditions.append(Part.category == category)
    if part_name and part_name.strip():
        conditions.append(func.lower(Part.part_name).contains(part_name.strip().lower()))

    total = int(db.execute(select(func.count(Part.id)).where(*conditions)).scalar_one())
    rows = db.execute(
        select(Part)
        .where(*conditions)
        .order_by(Part.created_at.desc(), Part.part_name.asc())
        .offset(offset)
        .limit(limit)
    ).scalars().all()
    items = [_part_out(row) for row in rows]
    count = len(items)
    return PartListOut(
        items=items,
        pagination=PaginationMeta(
            total=total,
            limit=limit,
            offset=offset,
            count=count,
            has_next=(offset + count) < total,
        ),
    )


@router.get(
    "/{part_id}",
    response_model=PartOut,
    summary="Get part",
    responses=error_responses(404, 422, 500),
)
def get_part(part_id: str, db: Session = Depends(get_db)):
    return _part_out(_get_part(db, part_id))


@router.post(
    "",
    response_model=PartOut,
    status_code=201,
    summary="Create part",
    responses=error_responses(422, 500),
)
def create_part(payload: PartCreate, db: Session = Depends(get_db)):
    part = Part(
        scope_of_work=payload.scope_of_work,
        part_name=payload.part_name,
        category=payload.category,
        unit_type=payload.unit_type,
        part_price=to_money(payload.part_price),
    )
    db.add(part)
    db.commit()
    db.refresh(part)
    log_event("part.create", part_id=part.id, scope_of_work=part.scope_of_work)
    return _part_out(part)


@router.put(
    "/{part_id}",
    response_model=PartOut,
    summary="Update part",
    responses=error_responses(404, 422, 500),
)
def update_part(part_id: str, payload: PartUpdate, db: Session = Depends(get_db)):
    part = _get_part(db, part_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "part_price" in changes:
        changes["part_price"] = to_money(changes["part_price"])
    for field_name, value in changes.items():
        setattr(part, field_name, value)
    db.commit()
    db.refresh(part)
    log_event("part.update", part_id=part.id, fields=sorted(changes))
    return _part_out(part)


@router.delete(
    "/{part_id}",
    response_model=DeleteOut,
    summary="Delete part",
    responses=error_responses(404, 422, 500),
)
def delete_part(part_id: str, db: Session = Depends(get_db)):
    part = _get_part(db, part_id)
    db.delete(part)
    db.commit()
    log_event("part.delete", part_id=part_id)
    return DeleteOut(message="Part deleted successfully")
