# backend/ticket_logger/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría para la aplicación.

Las categorías forman un árbol mediante parent_id. Al borrar una categoría
padre, sus hijas quedan como categorías raíz (ON DELETE SET NULL).
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ticket_logger.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    image = Column(String(255), nullable=True)
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent", passive_deletes=True)
