from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class StockFactRow(BaseModel):
    """One receipt or realization line as read from the fact tables."""
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    qty: int = 0
    created_at: Optional[datetime] = None
    # Product labels, only loaded for received facts
    product_name: Optional[str] = None
    article: Optional[str] = None
    brand_name: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None

    class Config:
        from_attributes = True


class AvailableStockOut(BaseModel):
    product_id: int
    product_name: str
    article: str
    size_code: str
    color_id: Optional[int] = None
    color_name: str
    qty: int


class StockReportRow(AvailableStockOut):
    brand: str = ""
    category: str = ""
    last_receipt_date: Optional[datetime] = None


class StockReportOut(BaseModel):
    total_products: int
    total_items: int
    total_quantity: int
    stock: List[StockReportRow]


class StockQueryParams(EmptyStringModel):
    category_id: Optional[int] = None
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(50, ge=1, le=500)


class ArticleColorOut(BaseModel):
    color_id: Optional[int] = None
    color_name: str
    sizes: List[int]
    total: int


class ArticleStockRow(BaseModel):
    id: int
    article: str
    name: str
    brand_name: str = ""
    total: int
    last_receipt_date: Optional[datetime] = None
    color: ArticleColorOut


class PaginationOut(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class StockByArticleOut(BaseModel):
    items: List[ArticleStockRow]
    sizes: List[str]
    pagination: PaginationOut


class ProductStockItem(BaseModel):
    size_code: str
    color_id: Optional[int] = None
    qty: int


class ProductStockOut(BaseModel):
    product_id: int
    total_quantity: int
    stock_items: List[ProductStockItem]


class StockCheckItem(BaseModel):
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    qty: int = Field(..., gt=0)


class StockCheckRequest(BaseModel):
    items: List[StockCheckItem] = Field(..., min_length=1)


class StockAvailabilityOut(BaseModel):
    available: bool
    available_qty: int
    requested_qty: int
    color_id: Optional[int] = None
    product_name: Optional[str] = None
    message: str = ""


class StockCheckError(BaseModel):
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    requested_qty: int
    available_qty: int
    product_name: Optional[str] = None
    message: str


class StockValidationOut(BaseModel):
    valid: bool
    errors: List[StockCheckError] = []
    items: List[StockCheckItem] = []
