from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitout.core.money import MAX_PART_PRICE
from fitout.schemas.common import PaginationMeta

ScopeOfWork = Literal["electrical", "data", "cctv", "partion", "fire_and_safety", "access"]
PartCategory = Literal["inhouse", "out_sourced", "bought_out"]
UnitType = Literal["sq_feet", "number", "meter"]


class PartCreate(BaseModel):
    scope_of_work: ScopeOfWork
    part_name: str
    category: PartCategory
    unit_type: UnitType
    part_price: Decimal = Field(ge=0, le=MAX_PART_PRICE)

    @field_validator("part_name")
    @classmethod
    def validate_part_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("part_name is required")
        return cleaned

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scope_of_work": "electrical",
                "part_name": "6A modular switch",
                "category": "bought_out",
                "unit_type": "number",
                "part_price": 85.0,
            }
        }
    )


class PartUpdate(BaseModel):
    scope_of_work: Optional[ScopeOfWork] = None
    part_name: Optional[str] = None
    category: Optional[PartCategory] = None
    unit_type: Optional[UnitType] = None
    part_price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_PART_PRICE)

    @field_validator("part_name")
    @classmethod
    def validate_part_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("part_name cannot be blank")
        return cleaned


class PartOut(BaseModel):
    id: str
    scope_of_work: str
    part_name: str
    category: str
    unit_type: str
    part_price: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PartListOut(BaseModel):
    items: list[PartOut]
    pagination: PaginationMeta
