# backend/ticket_logger/core/exceptions.py
"""
Excepciones de dominio de la aplicación.

Los servicios lanzan estas excepciones y las dejan propagar sin capturarlas;
los manejadores registrados en api/error_handlers.py las traducen a una
respuesta HTTP con el código de estado que declara cada clase.
"""


class TicketLoggerError(Exception):
    """
    Excepción base para errores de servicio.

    - message: mensaje legible que se puede devolver al cliente
    - status_code: código HTTP asociado
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"detail": self.message}


class ValidationError(TicketLoggerError):
    """Entrada inválida para la regla de negocio (400)."""


class DuplicateKeyError(ValidationError):
    """Ya existe un registro con la misma clave natural (código, nombre, dirección)."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(TicketLoggerError):
    """La entidad o una de sus referencias no existe (404)."""

    status_code = 404


class StorageError(TicketLoggerError):
    """Fallo al guardar o borrar un fichero (500)."""

    status_code = 500


class AuthenticationError(TicketLoggerError):
    """Token ausente, mal formado, caducado o con firma inválida (401)."""

    status_code = 401


__all__ = [
    "TicketLoggerError",
    "ValidationError",
    "DuplicateKeyError",
    "NotFoundError",
    "StorageError",
    "AuthenticationError",
]
