# backend/ticket_logger/db/models/region_model.py
"""
Modelo de región (comunidad autónoma). Una región agrupa provincias.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ticket_logger.db.database import Base

class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(2), nullable=False, unique=True)
    name = Column(String(100), nullable=False)

    provinces = relationship("Province", back_populates="region", cascade="all, delete-orphan", passive_deletes=True)
