# backend/ticket_logger/db/models/location_model.py
"""
Modelo de ubicación: la tienda concreta de un supermercado en una provincia.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ticket_logger.db.database import Base

class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    address = Column(String(255), nullable=False, unique=True)
    city = Column(String(100), nullable=False)
    supermarket_id = Column(Integer, ForeignKey("supermarkets.id", ondelete="CASCADE"), nullable=False)
    province_id = Column(Integer, ForeignKey("provinces.id", ondelete="CASCADE"), nullable=False)

    supermarket = relationship("Supermarket", back_populates="locations")
    province = relationship("Province", back_populates="locations")
    tickets = relationship("Ticket", back_populates="location", cascade="all, delete-orphan", passive_deletes=True)
