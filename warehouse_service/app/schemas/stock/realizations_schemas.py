from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class RealizationItemCreate(BaseModel):
    product_id: int
    size_code: str = Field(..., min_length=1)
    color_id: Optional[int] = None
    qty: int = Field(..., gt=0)


class RealizationCreate(BaseModel):
    recipient_id: int
    notes: Optional[str] = ""
    items: List[RealizationItemCreate] = Field(..., min_length=1)


class RealizationItemOut(BaseModel):
    id: int
    realization_id: int
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    qty: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RealizationOut(BaseModel):
    id: int
    sender_id: Optional[str] = None
    recipient_id: int
    notes: Optional[str] = None
    total_items: int
    created_at: Optional[datetime] = None
    items: List[RealizationItemOut] = []

    class Config:
        from_attributes = True
