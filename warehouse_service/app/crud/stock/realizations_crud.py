# app/crud/stock/realizations_crud.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from shared.utils.logger import get_logger
from ...core.exceptions import InsufficientStockError, InvalidSizeError
from ...enum.stock_enum import CHILDREN_CATEGORY_ID, CHILDREN_SIZES
from ...helpers.normalize_helper import is_children_size
from ...models.catalog.products import Product
from ...models.stock.realizations import Realization, RealizationItem
from ...schemas.stock.realizations_schemas import RealizationCreate
from ...schemas.stock.stock_schemas import StockCheckItem
from .receipts_crud import ensure_products_exist
from .stock_crud import normalize_stock_items, validate_stock_for_items
from .stock_facts_repository import SqlStockFactSource

logger = get_logger(__name__)


def get_realizations(db: Session, skip: int = 0, limit: int = 100) -> List[Realization]:
    return (
        db.query(Realization)
        .options(selectinload(Realization.items))
        .order_by(Realization.created_at.desc(), Realization.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_realization_by_id(db: Session, realization_id: int) -> Optional[Realization]:
    return (
        db.query(Realization)
        .options(selectinload(Realization.items))
        .filter(Realization.id == realization_id)
        .first()
    )


def _validate_children_sizes(db: Session, items: List[StockCheckItem]) -> None:
    categories = dict(
        db.query(Product.id, Product.category_id)
        .filter(Product.id.in_({item.product_id for item in items}))
        .all()
    )
    for item in items:
        if categories.get(item.product_id) == CHILDREN_CATEGORY_ID and not is_children_size(item.size_code):
            raise InvalidSizeError(
                f"Children's products must use sizes {CHILDREN_SIZES[0]} to {CHILDREN_SIZES[-1]}, got: {item.size_code}"
            )


def create_realization(db: Session, realization: RealizationCreate, sender_id: Optional[str] = None) -> Realization:
    """
    Ship goods out. Every line is checked against current stock first; one
    short line rejects the whole document.
    """
    items = normalize_stock_items(realization.items)
    product_ids = {item.product_id for item in items}
    ensure_products_exist(db, list(product_ids))
    _validate_children_sizes(db, items)

    # Product row locks serialize realizations of the same products until commit
    db.query(Product.id).filter(Product.id.in_(product_ids)).with_for_update().all()
    validation = validate_stock_for_items(
        SqlStockFactSource(db, hold_transaction=True), items)
    if not validation.valid:
        db.rollback()
        logger.info("Realization rejected: %s lines short of stock",
                    len(validation.errors))
        raise InsufficientStockError(
            "Not enough stock in the warehouse", data=validation.model_dump())

    db_realization = Realization(
        sender_id=sender_id,
        recipient_id=realization.recipient_id,
        notes=realization.notes,
        total_items=sum(item.qty for item in validation.items),
    )
    db.add(db_realization)
    db.flush()

    db.add_all([
        RealizationItem(
            realization_id=db_realization.id,
            product_id=item.product_id,
            size_code=item.size_code,
            color_id=item.color_id,
            qty=item.qty,
        )
        for item in validation.items
    ])
    db.commit()
    db.refresh(db_realization)
    logger.info("Realization %s created for recipient %s",
                db_realization.id, realization.recipient_id)
    return db_realization
