# app/models/catalog/categories.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)

    products = relationship("Product", back_populates="category")
