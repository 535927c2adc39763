# backend/ticket_logger/db/models/province_model.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ticket_logger.db.database import Base

class Province(Base):
    __tablename__ = "provinces"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(2), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    region_id = Column(Integer, ForeignKey("regions.id", ondelete="CASCADE"), nullable=False)

    region = relationship("Region", back_populates="provinces")
    locations = relationship("Location", back_populates="province", cascade="all, delete-orphan", passive_deletes=True)
