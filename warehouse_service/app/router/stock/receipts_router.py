# app/router/stock/receipts_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_warehouse_db as get_db
from shared.core.schemas import UserToken
from shared.core.auth import allow_storekeeper, validate_current_token
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ...schemas.stock.receipts_schemas import ReceiptCreate, ReceiptOut
from ...crud.stock import receipts_crud as crud

router = APIRouter(prefix="/api/receipts",
                   tags=["receipts"], dependencies=[Depends(validate_current_token)])


@router.get("/", response_model=List[ReceiptOut])
def read_receipts(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_receipts(db, skip=skip, limit=limit)


@router.get("/{receipt_id}", response_model=ReceiptOut)
def read_receipt(receipt_id: int, db: Session = Depends(get_db)):
    db_receipt = crud.get_receipt_by_id(db, receipt_id)
    if not db_receipt:
        return error_response(
            message="Receipt not found",
            status_code=AppStatusCode.NOT_FOUND,
            http_status=404
        )
    return db_receipt


@router.post("/", response_model=None)
def create_receipt(
    receipt: ReceiptCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_storekeeper)
):
    result = crud.create_receipt(db, receipt, transferrer_id=current_user.user_id)
    return success_response(data=ReceiptOut.model_validate(result), message="Receipt created successfully")
