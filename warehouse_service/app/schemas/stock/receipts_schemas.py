from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class ReceiptItemCreate(BaseModel):
    product_id: int
    size_code: str = Field(..., min_length=1)
    color_id: Optional[int] = None
    qty: int = Field(..., gt=0)


class ReceiptCreate(BaseModel):
    transferrer_id: Optional[str] = None
    notes: Optional[str] = None
    items: List[ReceiptItemCreate] = Field(..., min_length=1)


class ReceiptItemOut(BaseModel):
    id: int
    receipt_id: int
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    qty: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReceiptOut(BaseModel):
    id: int
    transferrer_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[ReceiptItemOut] = []

    class Config:
        from_attributes = True
