# backend/ticket_logger/db/models/supermarket_model.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ticket_logger.db.database import Base

class Supermarket(Base):
    __tablename__ = "supermarkets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)

    locations = relationship("Location", back_populates="supermarket", cascade="all, delete-orphan", passive_deletes=True)
