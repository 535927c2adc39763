# backend/ticket_logger/core/stomp.py
"""
Codificación y decodificación de tramas STOMP (1.0 a 1.2) sobre WebSocket.

Una trama es:

    COMANDO\n
    cabecera:valor\n
    ...\n
    \n
    cuerpo\0

Un mensaje que sólo contiene saltos de línea es un heart-beat y no es una trama.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

NULL = "\x00"

CLIENT_COMMANDS = {
    "CONNECT", "STOMP", "SEND", "SUBSCRIBE", "UNSUBSCRIBE",
    "ACK", "NACK", "BEGIN", "COMMIT", "ABORT", "DISCONNECT",
}

# En CONNECT/CONNECTED las cabeceras no se escapan
_NO_ESCAPE_COMMANDS = {"CONNECT", "CONNECTED"}

_ESCAPES = {"\\": "\\\\", "\r": "\\r", "\n": "\\n", ":": "\\c"}
_UNESCAPES = {"\\": "\\", "r": "\r", "n": "\n", "c": ":"}


class FrameError(ValueError):
    """Trama STOMP mal formada."""


@dataclass
class Frame:
    command: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""


def _escape(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def _unescape(value: str) -> str:
    out = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt not in _UNESCAPES:
            raise FrameError(f"Secuencia de escape no válida: \\{nxt or ''}")
        out.append(_UNESCAPES[nxt])
    return "".join(out)


def parse_frame(data: str) -> Optional[Frame]:
    """
    Decodifica un mensaje de texto recibido por el WebSocket.

    Returns:
        La trama, o None si el mensaje es un heart-beat

    Raises:
        FrameError: si la trama está mal formada
    """
    data = data.lstrip("\r\n")
    if not data:
        return None

    head, sep, rest = data.partition("\n\n")
    if not sep:
        # Trama sin cabeceras ni cuerpo ("DISCONNECT\n\0" o similar)
        head = data.rstrip(NULL).rstrip("\r\n")
        if "\n" in head:
            raise FrameError("Falta la línea en blanco tras las cabeceras")
        if not head.strip():
            raise FrameError("Trama sin comando")
        return Frame(command=head.strip())

    lines = head.replace("\r\n", "\n").split("\n")
    command = lines[0].strip()
    if not command:
        raise FrameError("Trama sin comando")

    escape = command not in _NO_ESCAPE_COMMANDS
    headers: Dict[str, str] = {}
    for line in lines[1:]:
        if not line:
            continue
        key, colon, value = line.partition(":")
        if not colon:
            raise FrameError(f"Cabecera mal formada: {line}")
        if escape:
            key, value = _unescape(key), _unescape(value)
        # Si una cabecera se repite, vale la primera
        headers.setdefault(key, value)

    if "content-length" in headers:
        try:
            length = int(headers["content-length"])
        except ValueError:
            raise FrameError("content-length no es un número")
        encoded = rest.encode("utf-8")
        if len(encoded) < length:
            raise FrameError("Cuerpo más corto que content-length")
        body = encoded[:length].decode("utf-8")
    else:
        end = rest.find(NULL)
        if end == -1:
            raise FrameError("Falta el terminador NULL")
        body = rest[:end]

    return Frame(command=command, headers=headers, body=body)


def serialize_frame(frame: Frame) -> str:
    """
    Codifica una trama como texto. Si hay cuerpo se añade content-length.
    """
    escape = frame.command not in _NO_ESCAPE_COMMANDS
    lines = [frame.command]
    headers = dict(frame.headers)
    if frame.body and "content-length" not in headers:
        headers["content-length"] = str(len(frame.body.encode("utf-8")))
    for key, value in headers.items():
        if escape:
            key, value = _escape(key), _escape(str(value))
        lines.append(f"{key}:{value}")
    return "\n".join(lines) + "\n\n" + frame.body + NULL
