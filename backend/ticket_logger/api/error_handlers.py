# backend/ticket_logger/api/error_handlers.py
"""
Manejadores de excepciones de FastAPI que traducen los errores de dominio a
respuestas HTTP.

Los servicios lanzan excepciones de ticket_logger.core.exceptions y nadie las
captura por el camino; aquí se convierten en {"detail": "..."} con el código
de estado que declara cada clase. Además:
- RequestValidationError (entrada mal formada) -> 400
- IntegrityError (p. ej. carrera entre dos altas con la misma clave) -> 400
- Cualquier otra excepción -> 500, registrada con traza
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from ticket_logger.core.exceptions import TicketLoggerError
from ticket_logger.core.i18n import get_message, resolve_locale

logger = logging.getLogger(__name__)


def _locale(request: Request) -> str:
    return resolve_locale(request.headers.get("accept-language"))


async def ticket_logger_error_handler(request: Request, exc: TicketLoggerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s en %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    else:
        logger.info("%s en %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.info("Entrada no válida en %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={"detail": get_message("error.invalidInput", _locale(request), errors=errors)},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # No se devuelve el mensaje de la base de datos al cliente
    logger.warning("IntegrityError en %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"detail": get_message("error.integrity", _locale(request))})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error inesperado en %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": get_message("error.unexpected", _locale(request))})


# Registra todos los manejadores en la app (se llama desde main.py)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TicketLoggerError, ticket_logger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
