# backend/ticket_logger/core/i18n.py
"""
Mensajes localizados de la API.

Los servicios reciben el idioma de quien llama (cabecera Accept-Language) y
resuelven aquí los mensajes de error. Si el idioma o la clave no existen se
usa el idioma por defecto configurado.
"""

from typing import Optional

from ticket_logger.core.config import settings

MESSAGES = {
    "es": {
        # Regiones
        "region.codeExist": "El código de la región ya existe.",
        "region.notFound": "La región no existe.",
        "region.deleted": "Región eliminada con éxito.",
        # Provincias
        "province.codeExist": "El código de la provincia ya existe.",
        "province.notFound": "La provincia no existe.",
        "province.regionNotFound": "La región indicada para la provincia no existe.",
        "province.deleted": "Provincia eliminada con éxito.",
        # Supermercados
        "supermarket.nameExist": "El nombre del supermercado ya existe.",
        "supermarket.notFound": "El supermercado no existe.",
        "supermarket.deleted": "Supermercado eliminado con éxito.",
        # Ubicaciones
        "location.addressExist": "Ya existe una ubicación con esa dirección.",
        "location.notFound": "La ubicación no existe.",
        "location.supermarketNotFound": "El supermercado indicado para la ubicación no existe.",
        "location.provinceNotFound": "La provincia indicada para la ubicación no existe.",
        "location.deleted": "Ubicación eliminada con éxito.",
        # Categorías
        "category.nameExist": "El nombre de la categoría ya existe.",
        "category.notFound": "La categoría no existe.",
        "category.parentNotFound": "La categoría padre no existe.",
        "category.selfParent": "Una categoría no puede ser su propia categoría padre.",
        "category.descendantParent": "No se puede mover una categoría debajo de una de sus subcategorías.",
        "category.deleted": "Categoría eliminada con éxito.",
        # Productos
        "product.notFound": "El producto no existe.",
        "product.deleted": "Producto eliminado con éxito.",
        # Tickets
        "ticket.notFound": "El ticket no existe.",
        "ticket.locationNotFound": "La ubicación indicada para el ticket no existe.",
        "ticket.productsNotFound": "Alguno de los productos indicados no existe: {ids}.",
        "ticket.productAlreadyAdded": "El producto ya está asociado al ticket.",
        "ticket.productNotInTicket": "El producto no está asociado al ticket.",
        "ticket.deleted": "Ticket eliminado con éxito.",
        # Ficheros
        "storage.invalidExtension": "Extensión de imagen no permitida: {extension}.",
        "storage.tooLarge": "La imagen supera el tamaño máximo permitido.",
        "storage.saveFailed": "Error al guardar la imagen.",
        "storage.deleteFailed": "Error al eliminar la imagen.",
        # Genéricos
        "error.invalidInput": "Datos de entrada no válidos: {errors}",
        "error.integrity": "La operación viola una restricción de integridad.",
        "error.unexpected": "Error interno del servidor.",
    },
    "en": {
        "region.codeExist": "The region code already exists.",
        "region.notFound": "The region does not exist.",
        "region.deleted": "Region deleted successfully.",
        "province.codeExist": "The province code already exists.",
        "province.notFound": "The province does not exist.",
        "province.regionNotFound": "The region given for the province does not exist.",
        "province.deleted": "Province deleted successfully.",
        "supermarket.nameExist": "The supermarket name already exists.",
        "supermarket.notFound": "The supermarket does not exist.",
        "supermarket.deleted": "Supermarket deleted successfully.",
        "location.addressExist": "A location with that address already exists.",
        "location.notFound": "The location does not exist.",
        "location.supermarketNotFound": "The supermarket given for the location does not exist.",
        "location.provinceNotFound": "The province given for the location does not exist.",
        "location.deleted": "Location deleted successfully.",
        "category.nameExist": "The category name already exists.",
        "category.notFound": "The category does not exist.",
        "category.parentNotFound": "The parent category does not exist.",
        "category.selfParent": "A category cannot be its own parent.",
        "category.descendantParent": "A category cannot be moved under one of its subcategories.",
        "category.deleted": "Category deleted successfully.",
        "product.notFound": "The product does not exist.",
        "product.deleted": "Product deleted successfully.",
        "ticket.notFound": "The ticket does not exist.",
        "ticket.locationNotFound": "The location given for the ticket does not exist.",
        "ticket.productsNotFound": "Some of the given products do not exist: {ids}.",
        "ticket.productAlreadyAdded": "The product is already in the ticket.",
        "ticket.productNotInTicket": "The product is not in the ticket.",
        "ticket.deleted": "Ticket deleted successfully.",
        "storage.invalidExtension": "Image extension not allowed: {extension}.",
        "storage.tooLarge": "The image exceeds the maximum allowed size.",
        "storage.saveFailed": "Error saving the image.",
        "storage.deleteFailed": "Error deleting the image.",
        "error.invalidInput": "Invalid input: {errors}",
        "error.integrity": "The operation violates an integrity constraint.",
        "error.unexpected": "Internal server error.",
    },
}


def resolve_locale(accept_language: Optional[str]) -> str:
    """
    Obtiene el idioma soportado a partir de una cabecera Accept-Language.

    Ejemplo: "en-US,en;q=0.9,es;q=0.8" -> "en"
    """
    if not accept_language:
        return settings.DEFAULT_LOCALE if settings.DEFAULT_LOCALE in MESSAGES else "es"

    for part in accept_language.split(","):
        language = part.split(";")[0].strip().lower()
        language = language.split("-")[0]
        if language in MESSAGES:
            return language
    return settings.DEFAULT_LOCALE if settings.DEFAULT_LOCALE in MESSAGES else "es"


def get_message(key: str, locale: Optional[str] = None, **params) -> str:
    fallback = MESSAGES.get(settings.DEFAULT_LOCALE, MESSAGES["es"])
    catalog = MESSAGES.get(locale or settings.DEFAULT_LOCALE, fallback)
    template = catalog.get(key) or fallback.get(key, key)
    return template.format(**params) if params else template
