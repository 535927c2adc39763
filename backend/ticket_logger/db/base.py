# backend/ticket_logger/db/base.py
"""
Importa todos los modelos para que queden registrados en Base.metadata.

Las relaciones se declaran por nombre ("Province", "Ticket"...), así que
cualquier consulta necesita que el conjunto completo de modelos esté cargado.
Los módulos crud importan los modelos desde aquí.
"""

from ticket_logger.db.database import Base  # noqa: F401
from ticket_logger.db.models.region_model import Region  # noqa: F401
from ticket_logger.db.models.province_model import Province  # noqa: F401
from ticket_logger.db.models.supermarket_model import Supermarket  # noqa: F401
from ticket_logger.db.models.location_model import Location  # noqa: F401
from ticket_logger.db.models.category_model import Category  # noqa: F401
from ticket_logger.db.models.product_model import Product  # noqa: F401
from ticket_logger.db.models.ticket_model import Ticket, ticket_products  # noqa: F401
