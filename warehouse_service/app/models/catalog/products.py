# app/models/catalog/products.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    article = Column(String(64), nullable=False, index=True)
    price = Column(Numeric(12, 2))
    brand_id = Column(Integer, ForeignKey("brands.id", ondelete="SET NULL"))
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"))
    # Default color of the model; stock rows carry their own color_id
    color_id = Column(Integer, ForeignKey("colors.id", ondelete="SET NULL"))
    is_visible = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    brand = relationship("Brand", back_populates="products")
    category = relationship("Category", back_populates="products")
