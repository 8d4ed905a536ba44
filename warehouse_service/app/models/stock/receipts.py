# app/models/stock/receipts.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transferrer_id = Column(String(64))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "ReceiptItem",
        order_by="ReceiptItem.id",
        back_populates="receipt",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class ReceiptItem(Base):
    """Goods received. Append-only: rows are never updated by the stock path."""
    __tablename__ = "receipt_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    receipt_id = Column(
        Integer,
        ForeignKey("receipts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    size_code = Column(String(32), nullable=False)
    # No FK: legacy rows reference colors that were since removed
    color_id = Column(Integer, nullable=True)
    qty = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    receipt = relationship("Receipt", back_populates="items")
    product = relationship("Product")
