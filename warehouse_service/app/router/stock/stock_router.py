# app/router/stock/stock_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends

from shared.core.auth import validate_current_token
from ...schemas.stock.stock_schemas import (
    AvailableStockOut,
    ProductStockOut,
    StockByArticleOut,
    StockCheckRequest,
    StockQueryParams,
    StockValidationOut,
)
from ...crud.stock import stock_crud as crud
from ...crud.stock.stock_facts_repository import SqlStockFactSource, get_stock_source

router = APIRouter(prefix="/api/stock",
                   tags=["stock"], dependencies=[Depends(validate_current_token)])


@router.get("/available", response_model=List[AvailableStockOut])
def read_available_stock(source: SqlStockFactSource = Depends(get_stock_source)):
    return crud.compute_available_stock(source)


@router.get("/", response_model=StockByArticleOut)
def read_stock_by_article(
    params: StockQueryParams = Depends(),
    source: SqlStockFactSource = Depends(get_stock_source)
):
    return crud.get_stock_by_article(source, params)


@router.get("/products/{product_id}", response_model=ProductStockOut)
def read_product_stock(
    product_id: int,
    size_code: Optional[str] = None,
    source: SqlStockFactSource = Depends(get_stock_source)
):
    return crud.calculate_stock(source, product_id, size_code)


@router.post("/check", response_model=StockValidationOut)
def check_stock(
    request: StockCheckRequest,
    source: SqlStockFactSource = Depends(get_stock_source)
):
    return crud.validate_stock_for_items(source, crud.normalize_stock_items(request.items))
