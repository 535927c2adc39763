# backend/ticket_logger/db/models/product_model.py
from sqlalchemy import Column, Integer, String, Numeric

from ticket_logger.db.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
