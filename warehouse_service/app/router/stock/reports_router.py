# app/router/stock/reports_router.py
from typing import Optional
from fastapi import APIRouter, Depends

from shared.core.auth import validate_current_token
from ...schemas.stock.stock_schemas import StockReportOut
from ...crud.stock import stock_crud as crud
from ...crud.stock.stock_facts_repository import SqlStockFactSource, get_stock_source

router = APIRouter(prefix="/api/reports",
                   tags=["reports"], dependencies=[Depends(validate_current_token)])


@router.get("/stock", response_model=StockReportOut)
def read_stock_report(
    article_search: Optional[str] = None,
    source: SqlStockFactSource = Depends(get_stock_source)
):
    return crud.get_stock_report(source, article_search)
