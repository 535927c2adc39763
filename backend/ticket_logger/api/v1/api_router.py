# backend/ticket_logger/api/v1/api_router.py
"""
Este archivo contiene los routers principales de la aplicación.

- api_router_v1: recursos REST, montado bajo API_PREFIX (/api)
- ws_router: broker STOMP (/ws) y endpoints HTTP de notificaciones
  (/ws/notifications), montado en la raíz
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from ticket_logger.api.v1.endpoints import (
    regions,
    provinces,
    supermarkets,
    locations,
    categories,
    products,
    tickets,
    notifications,
    websocket,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# JERARQUÍA GEOGRÁFICA
# Región -> Provincia -> Ubicación (tienda de un supermercado)
api_router_v1.include_router(
    regions.router,                 # Router con endpoints de regiones
    prefix="/regions",              # Prefijo: /api/regions
    tags=["Regions"]                # Tag para documentación OpenAPI/Swagger
)

api_router_v1.include_router(
    provinces.router,
    prefix="/provinces",
    tags=["Provinces"]
)

api_router_v1.include_router(
    supermarkets.router,
    prefix="/supermarkets",
    tags=["Supermarkets"]
)

api_router_v1.include_router(
    locations.router,
    prefix="/locations",
    tags=["Locations"]
)

# ROUTER DE CATEGORÍAS
# Categorías jerárquicas con imagen (multipart/form-data)
api_router_v1.include_router(
    categories.router,
    prefix="/categories",
    tags=["Categories"]
)

# ROUTERS DE COMPRAS
# Catálogo de productos y tickets que los referencian
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

api_router_v1.include_router(
    tickets.router,
    prefix="/tickets",
    tags=["Tickets"]
)

# ========================================
# ROUTER DE MENSAJERÍA (fuera de /api)
# ========================================

ws_router = APIRouter()

ws_router.include_router(
    notifications.router,
    prefix="/ws/notifications",
    tags=["Notifications"]
)

# Broker STOMP en /ws
ws_router.include_router(websocket.router)
