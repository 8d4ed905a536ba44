# app/crud/stock/stock_facts_repository.py
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol, Tuple

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_warehouse_db as get_db
from shared.utils.logger import get_logger
from ...core.exceptions import StockReadError
from ...models.catalog.brands import Brand
from ...models.catalog.categories import Category
from ...models.catalog.colors import Color
from ...models.catalog.products import Product
from ...models.stock.realizations import RealizationItem
from ...models.stock.receipts import ReceiptItem
from ...schemas.stock.stock_schemas import StockFactRow

logger = get_logger(__name__)


class StockFactSource(Protocol):
    """Read side of the stock facts. Passed explicitly into every stock computation."""

    def load_colors(self) -> List[Tuple[int, str]]:
        ...

    def load_received(self, product_id: Optional[int] = None,
                      size_code: Optional[str] = None) -> List[StockFactRow]:
        ...

    def load_realized(self, product_id: Optional[int] = None,
                      size_code: Optional[str] = None) -> List[StockFactRow]:
        ...

    def get_product_name(self, product_id: int) -> Optional[str]:
        ...

    def snapshot(self):
        """Context manager: reads inside it see one consistent state."""
        ...


class SqlStockFactSource:
    def __init__(self, db: Session, snapshot_reads: Optional[bool] = None, hold_transaction: bool = False):
        self.db = db
        # Caller owns the open transaction (and its row locks); snapshot neither resets nor ends it
        self.hold_transaction = hold_transaction
        self.snapshot_reads = settings.STOCK_SNAPSHOT_READS if snapshot_reads is None else snapshot_reads

    # ----------------- Snapshot -----------------

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        db = self.db
        if self.hold_transaction or db.new or db.dirty or db.deleted:
            # Stay in the caller's transaction
            logger.debug("Stock snapshot reusing the open write transaction")
            yield
            return

        if db.in_transaction():
            # Nothing to lose, end the read transaction so the snapshot starts clean
            db.rollback()

        if self.snapshot_reads and db.get_bind().dialect.name == "postgresql":
            db.connection(execution_options={
                          "isolation_level": "REPEATABLE READ"})
        try:
            yield
        finally:
            db.rollback()

    # ----------------- Reads -----------------

    def _fetch(self, what: str, query) -> list:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to read %s", what)
            self.db.rollback()
            raise StockReadError(f"Failed to read {what}") from exc

    def load_colors(self) -> List[Tuple[int, str]]:
        rows = self._fetch("colors", self.db.query(Color.id, Color.name))
        return [(row.id, row.name) for row in rows]

    def load_received(self, product_id: Optional[int] = None,
                      size_code: Optional[str] = None) -> List[StockFactRow]:
        query = (
            self.db.query(
                ReceiptItem.product_id,
                ReceiptItem.size_code,
                ReceiptItem.color_id,
                ReceiptItem.qty,
                ReceiptItem.created_at,
                Product.name.label("product_name"),
                Product.article,
                Brand.name.label("brand_name"),
                Product.category_id,
                Category.name.label("category_name"),
            )
            .outerjoin(Product, Product.id == ReceiptItem.product_id)
            .outerjoin(Brand, Brand.id == Product.brand_id)
            .outerjoin(Category, Category.id == Product.category_id)
        )
        if product_id is not None:
            query = query.filter(ReceiptItem.product_id == product_id)
        if size_code:
            query = query.filter(ReceiptItem.size_code == size_code)

        # id order makes "first row seen" deterministic for labels
        rows = self._fetch("receipt items", query.order_by(ReceiptItem.id))
        return [StockFactRow.model_validate(row, from_attributes=True) for row in rows]

    def load_realized(self, product_id: Optional[int] = None,
                      size_code: Optional[str] = None) -> List[StockFactRow]:
        query = self.db.query(
            RealizationItem.product_id,
            RealizationItem.size_code,
            RealizationItem.color_id,
            RealizationItem.qty,
            RealizationItem.created_at,
        )
        if product_id is not None:
            query = query.filter(RealizationItem.product_id == product_id)
        if size_code:
            query = query.filter(RealizationItem.size_code == size_code)

        rows = self._fetch("realization items",
                           query.order_by(RealizationItem.id))
        return [StockFactRow.model_validate(row, from_attributes=True) for row in rows]

    def get_product_name(self, product_id: int) -> Optional[str]:
        rows = self._fetch("products", self.db.query(
            Product.name).filter(Product.id == product_id))
        return rows[0].name if rows else None


def get_stock_source(db: Session = Depends(get_db)) -> SqlStockFactSource:
    return SqlStockFactSource(db)
