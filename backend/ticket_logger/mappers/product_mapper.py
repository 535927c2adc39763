# backend/ticket_logger/mappers/product_mapper.py
from typing import Optional

from ticket_logger.db.models.product_model import Product
from ticket_logger.schemas.product_schema import ProductCreate, ProductResponse


def to_dto(product: Optional[Product]) -> Optional[ProductResponse]:
    if product is None:
        return None
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=float(product.price) if product.price is not None else 0.0,
    )


def to_entity(product_in: ProductCreate) -> Product:
    return Product(name=product_in.name, price=product_in.price)
