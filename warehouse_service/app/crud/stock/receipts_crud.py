# app/crud/stock/receipts_crud.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from shared.utils.logger import get_logger
from ...core.exceptions import InvalidSizeError, ProductNotFoundError
from ...helpers.normalize_helper import normalize_color_id, normalize_size_code
from ...models.catalog.products import Product
from ...models.stock.receipts import Receipt, ReceiptItem
from ...schemas.stock.receipts_schemas import ReceiptCreate

logger = get_logger(__name__)


def get_receipts(db: Session, skip: int = 0, limit: int = 100) -> List[Receipt]:
    return (
        db.query(Receipt)
        .options(selectinload(Receipt.items))
        .order_by(Receipt.created_at.desc(), Receipt.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_receipt_by_id(db: Session, receipt_id: int) -> Optional[Receipt]:
    return (
        db.query(Receipt)
        .options(selectinload(Receipt.items))
        .filter(Receipt.id == receipt_id)
        .first()
    )


def ensure_products_exist(db: Session, product_ids: List[int]) -> None:
    wanted = set(product_ids)
    found = {
        row.id for row in db.query(Product.id).filter(Product.id.in_(wanted)).all()
    }
    missing = sorted(wanted - found)
    if missing:
        raise ProductNotFoundError(
            f"Products not found: {', '.join(str(p) for p in missing)}")


def create_receipt(db: Session, receipt: ReceiptCreate, transferrer_id: Optional[str] = None) -> Receipt:
    sizes = [normalize_size_code(item.size_code) for item in receipt.items]
    for raw, size_code in zip(receipt.items, sizes):
        if not size_code:
            raise InvalidSizeError(f"Invalid size code: {raw.size_code!r}")
    ensure_products_exist(db, [item.product_id for item in receipt.items])

    db_receipt = Receipt(
        transferrer_id=transferrer_id or receipt.transferrer_id,
        notes=receipt.notes,
    )
    db.add(db_receipt)
    db.flush()

    # ✅ Explicit parent link, no timestamp matching
    db.add_all([
        ReceiptItem(
            receipt_id=db_receipt.id,
            product_id=item.product_id,
            size_code=size_code,
            color_id=normalize_color_id(item.color_id),
            qty=item.qty,
        )
        for item, size_code in zip(receipt.items, sizes)
    ])

    db.commit()
    db.refresh(db_receipt)
    logger.info("Receipt %s created with %s items",
                db_receipt.id, len(receipt.items))
    return db_receipt
