# app/models/stock/realizations.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Realization(Base):
    __tablename__ = "realizations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(String(64))
    recipient_id = Column(Integer, nullable=False)
    notes = Column(Text)
    total_items = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "RealizationItem",
        order_by="RealizationItem.id",
        back_populates="realization",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class RealizationItem(Base):
    """Goods shipped out to a recipient. Append-only."""
    __tablename__ = "realization_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    realization_id = Column(
        Integer,
        ForeignKey("realizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    size_code = Column(String(32), nullable=False)
    # No FK: legacy rows reference colors that were since removed
    color_id = Column(Integer, nullable=True)
    qty = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    realization = relationship("Realization", back_populates="items")
    product = relationship("Product")
