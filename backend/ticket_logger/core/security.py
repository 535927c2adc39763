# backend/ticket_logger/core/security.py
"""
Verificación de tokens JWT para las conexiones al broker de mensajes (/ws).

Los tokens los emite otro servicio firmándolos con su clave privada (RS256);
aquí sólo se verifica la firma con la clave pública, la caducidad y los
claims "sub" (usuario) y "roles" (lista de cadenas). El resultado es un
Principal que la sesión STOMP guarda y pasa explícitamente.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError
from pydantic import BaseModel

from ticket_logger.core.config import settings
from ticket_logger.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class Principal(BaseModel):
    """Usuario autenticado de una conexión."""
    username: str
    roles: List[str] = []


class TokenVerifier:
    """
    Verifica tokens firmados con una clave pública.

    No hay refresco, lista de revocación ni margen de caducidad: un token
    caducado es inválido en el momento de verificarlo.
    """

    def __init__(self, public_key: str, algorithm: Optional[str] = None):
        self.public_key = public_key
        self.algorithm = algorithm or settings.JWT_ALGORITHM

    def verify(self, token: str, expected_subject: Optional[str] = None) -> Principal:
        """
        Valida el token y devuelve el Principal.

        Args:
            token: JWT sin el prefijo "Bearer "
            expected_subject: si se indica, el "sub" del token debe coincidir

        Raises:
            AuthenticationError: token mal formado, firma inválida, caducado,
                sin subject, con roles que no son lista o de otro usuario
        """
        try:
            payload = jwt.decode(token, self.public_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token JWT caducado")
            raise AuthenticationError("Token caducado")
        except JWTError as e:
            logger.warning(f"Token JWT inválido: {e}")
            raise AuthenticationError("Token inválido")

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("El token no contiene el usuario (sub)")
        if expected_subject is not None and subject != expected_subject:
            logger.warning(f"El token pertenece a {subject}, se esperaba {expected_subject}")
            raise AuthenticationError("El token no corresponde al usuario esperado")

        roles = payload.get("roles", [])
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise AuthenticationError("El claim roles debe ser una lista de cadenas")

        return Principal(username=subject, roles=roles)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extrae el token de una cabecera "Authorization: Bearer <jwt>".
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Falta la cabecera Authorization con un token Bearer")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("Falta la cabecera Authorization con un token Bearer")
    return token


def authenticate_bearer(
    authorization: Optional[str],
    verifier: TokenVerifier,
    expected_subject: Optional[str] = None,
) -> Principal:
    return verifier.verify(extract_bearer_token(authorization), expected_subject=expected_subject)


def create_access_token(
    subject: str,
    roles: List[str],
    private_key: str,
    expires_delta: Optional[timedelta] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Crea un token con los mismos claims que emite el servidor de autenticación.

    Se usa en herramientas de desarrollo y en los tests.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": subject,
        "roles": roles,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, private_key, algorithm=algorithm or settings.JWT_ALGORITHM)
