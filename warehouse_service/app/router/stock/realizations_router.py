# app/router/stock/realizations_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_warehouse_db as get_db
from shared.core.schemas import UserToken
from shared.core.auth import allow_storekeeper, validate_current_token
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ...schemas.stock.realizations_schemas import RealizationCreate, RealizationOut
from ...crud.stock import realizations_crud as crud

router = APIRouter(prefix="/api/realizations",
                   tags=["realizations"], dependencies=[Depends(validate_current_token)])


@router.get("/", response_model=List[RealizationOut])
def read_realizations(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_realizations(db, skip=skip, limit=limit)


@router.get("/{realization_id}", response_model=RealizationOut)
def read_realization(realization_id: int, db: Session = Depends(get_db)):
    db_realization = crud.get_realization_by_id(db, realization_id)
    if not db_realization:
        return error_response(
            message="Realization not found",
            status_code=AppStatusCode.NOT_FOUND,
            http_status=404
        )
    return db_realization


# ----------------- Create Realization (storekeepers only) -----------------
@router.post("/", response_model=None)
def create_realization(
    realization: RealizationCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_storekeeper)
):
    result = crud.create_realization(db, realization, sender_id=current_user.user_id)
    return success_response(data=RealizationOut.model_validate(result), message="Realization created successfully")
