"""Contrato del transporte HTTP.

Por qué Protocol:
- La operación no depende de un `fetch` global: el transporte se inyecta.
- En tests se sustituye por un doble determinista sin tocar la red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RequestSpec


@runtime_checkable
class TransportResponse(Protocol):
    """Respuesta mínima: status, clasificación y un cuerpo legible una sola vez.

    Si la implementación ofrece `async aclose()`, la operación lo llama cuando
    descarta la respuesta sin leer el cuerpo.
    """

    @property
    def status_code(self) -> int: ...

    @property
    def response_type(self) -> str:
        """Clasificación de la respuesta ('basic', 'cors', 'opaque', ...)."""

        ...

    async def text(self) -> str: ...

    async def read_bytes(self) -> bytes: ...


@runtime_checkable
class HttpTransport(Protocol):
    """Envía una `RequestSpec` y devuelve la respuesta sin leer el cuerpo."""

    async def send(self, spec: RequestSpec) -> TransportResponse:
        ...
