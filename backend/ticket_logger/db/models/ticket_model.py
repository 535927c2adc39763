# backend/ticket_logger/db/models/ticket_model.py
"""
Modelo de ticket (compra) y su tabla de asociación con productos.
"""

from sqlalchemy import Column, Integer, Date, Numeric, ForeignKey, Table
from sqlalchemy.orm import relationship

from ticket_logger.db.database import Base

# Tabla de asociación M:N entre tickets y productos
ticket_products = Table(
    "ticket_products",
    Base.metadata,
    Column("ticket_id", Integer, ForeignKey("tickets.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False)

    location = relationship("Location", back_populates="tickets")
    products = relationship(
        "Product",
        secondary=ticket_products,
        passive_deletes=True,
    )
