"""Parseo de headers y construcción de la petición.

Funciones puras: no hacen I/O, así el parseo se prueba sin red.
"""

from __future__ import annotations

import logging
import re

from core.domain.errors import HeaderParseError
from core.domain.models import HttpMethod, RequestSpec

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def parse_headers(text: str) -> dict[str, str]:
    """Convierte un bloque `name: value` (una línea por header) en un dict.

    Reglas:
    - Líneas en blanco se ignoran.
    - Se corta en el primer ':'; nombre y valor se recortan. El valor puede
      quedar vacío, el nombre no.
    - Los nombres no distinguen mayúsculas: el último duplicado gana.

    Un error descarta todo lo parseado hasta ese momento.
    """

    headers: dict[str, str] = {}
    seen: dict[str, str] = {}
    for raw_line in _LINE_BREAK.split(text or ""):
        line = raw_line.strip()
        if not line:
            continue

        name, colon, value = line.partition(":")
        name = name.strip()
        if not colon or not name:
            raise HeaderParseError(line)

        previous = seen.get(name.lower())
        if previous is not None:
            del headers[previous]
        headers[name] = value.strip()
        seen[name.lower()] = name
    return headers


def build_request_spec(
    *,
    url: str,
    method: HttpMethod,
    payload: str,
    headers: dict[str, str],
) -> RequestSpec:
    body: str | None = None
    if payload:
        if method.allows_body:
            body = payload
        else:
            # GET/HEAD no llevan cuerpo: se descarta sin error.
            logger.debug("Dropping %d-char payload on %s request", len(payload), method.value)

    return RequestSpec(url=url, method=method, headers=headers, body=body)
