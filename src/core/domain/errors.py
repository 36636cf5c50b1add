"""Errores de la operación Fetch.

Por qué una jerarquía propia:
- El pipeline (recipe) necesita distinguir fallos de configuración, de parseo
  y de transporte sin inspeccionar excepciones de httpx.
- Todos heredan de `OperationError`, así la CLI captura un único tipo.
"""

from __future__ import annotations

TRANSPORT_HINTS = (
    "\n\nThis error could be caused by one of the following:\n"
    " - An invalid URL\n"
    " - Making a request to an insecure resource (HTTP) from a secure source (HTTPS)\n"
    " - Making a cross-origin request to a server which does not support CORS"
)


class OperationError(Exception):
    """Fallo de una operación del recipe (se reporta tal cual al usuario)."""


class ConfigurationError(OperationError):
    """No hay transporte HTTP disponible en este entorno."""

    def __init__(self, message: str = "Fetch API is not available in this environment.") -> None:
        super().__init__(message)


class InvalidArgumentError(OperationError):
    """Argumento fuera del esquema (método o tipo de retorno desconocido)."""


class HeaderParseError(OperationError):
    """Una línea del bloque de headers no tiene la forma `name: value`."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Could not parse header in line: {line}")


class BlockedResponseError(OperationError):
    """Respuesta opaca con status 0 (bloqueo cross-origin sin información)."""

    def __init__(self) -> None:
        super().__init__("Error: Null response. Try setting the connection mode to CORS.")


class TransportError(OperationError):
    """Cualquier otro fallo al enviar la petición o leer el cuerpo.

    El mensaje es la descripción del error original seguida de las pistas
    habituales (URL inválida, mixed content, CORS).
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        description = str(cause) or type(cause).__name__
        super().__init__(f"{description}{TRANSPORT_HINTS}")
