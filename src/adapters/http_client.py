"""Transporte HTTP sobre httpx.

Por qué un wrapper:
- Estandariza timeout, User-Agent y redirecciones del cliente en un único
  builder (`build_async_client`).
- Adapta `httpx.Response` al contrato `TransportResponse` del Core: cuerpo
  legible una sola vez, como texto o como bytes.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.models import RequestSpec

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la aplicación.

    `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        transport=transport,
    )


def build_request_headers(spec: RequestSpec) -> httpx.Headers:
    """Headers efectivos: los del recipe más la directiva de caché y el Content-Type por defecto."""

    headers = httpx.Headers(spec.headers)
    if spec.cache == "no-cache":
        headers.setdefault("Cache-Control", "no-cache")
        headers.setdefault("Pragma", "no-cache")
    if spec.body is not None:
        # Igual que fetch() con un body string.
        headers.setdefault("Content-Type", "text/plain;charset=UTF-8")
    return headers


class HttpxResponse:
    """Respuesta en streaming: el cuerpo se lee una única vez y luego se cierra todo."""

    def __init__(
        self,
        response: httpx.Response,
        *,
        client: httpx.AsyncClient | None = None,
        response_type: str = "basic",
    ) -> None:
        self._response = response
        self._client = client
        self._response_type = response_type
        self._consumed = False

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def response_type(self) -> str:
        return self._response_type

    @property
    def body_used(self) -> bool:
        return self._consumed

    async def text(self) -> str:
        await self._consume()
        return self._response.text

    async def read_bytes(self) -> bytes:
        await self._consume()
        return self._response.content

    async def aclose(self) -> None:
        await self._response.aclose()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _consume(self) -> None:
        if self._consumed:
            raise RuntimeError("Body has already been read")
        self._consumed = True
        try:
            await self._response.aread()
        finally:
            await self.aclose()


class HttpxTransport:
    """Implementación por defecto de `HttpTransport`.

    Sin pool: si no se inyecta `client`, abre un cliente por petición y lo
    cierra al leer el cuerpo.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def send(self, spec: RequestSpec) -> HttpxResponse:
        owned = self._client is None
        client = self._client if self._client is not None else build_async_client(self._settings)

        try:
            request = client.build_request(
                spec.method.value,
                spec.url,
                headers=build_request_headers(spec),
                content=spec.body,
            )
            response = await client.send(request, stream=True)
        except Exception:
            if owned:
                await client.aclose()
            raise

        logger.debug("%s %s -> %d", spec.method.value, spec.url, response.status_code)
        return HttpxResponse(
            response,
            client=client if owned else None,
            response_type=_classify(response, follow_redirects=client.follow_redirects),
        )


def _classify(response: httpx.Response, *, follow_redirects: bool) -> str:
    # Redirección no seguida: el llamador no ve el destino (análogo a redirect: "manual").
    if response.is_redirect and not follow_redirects:
        return "opaqueredirect"
    return "basic"


def default_transport(settings: AppSettings | None = None) -> HttpxTransport | None:
    """Transporte del entorno, o None si la red está deshabilitada por config."""

    settings = settings or AppSettings()
    if not settings.network_enabled:
        return None
    return HttpxTransport(settings)
