# app/models/catalog/colors.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from shared.core.database import Base


class Color(Base):
    __tablename__ = "colors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64))
    name = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
