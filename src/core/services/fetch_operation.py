"""Fetch operation: one outbound HTTP request as a recipe step.

The operation receives the URL as the recipe input and its configuration as
positional arguments (method, payload, headers, return type). Header parsing
and request construction live in `request_config`; the actual I/O is done by
an injected `HttpTransport` so the flow can be exercised without a network.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from adapters.http_client import default_transport
from core.config import AppSettings
from core.domain.errors import (
    BlockedResponseError,
    ConfigurationError,
    InvalidArgumentError,
    OperationError,
    TransportError,
)
from core.domain.models import (
    ArgumentSpec,
    FetchArgs,
    FetchResult,
    HttpMethod,
    OperationMetadata,
    OutputType,
    ReturnType,
)
from core.interfaces.transport import HttpTransport
from core.services.request_config import build_request_spec, parse_headers

logger = logging.getLogger(__name__)


class Operation(ABC):
    """Metadata shared by recipe operations.

    `output_type` and `present_type` are instance state: an operation may
    change them while running, so the recipe engine re-reads `metadata()`
    after every run instead of trusting the values from registration.
    """

    name: str = ""
    module: str = "Default"
    description: str = ""
    info_url: str = ""
    input_type: str = "string"

    def __init__(self) -> None:
        self.output_type: OutputType = OutputType.STRING
        self.present_type: OutputType = OutputType.STRING
        self.args: list[ArgumentSpec] = []

    def metadata(self) -> OperationMetadata:
        return OperationMetadata(
            name=self.name,
            module=self.module,
            description=self.description,
            info_url=self.info_url,
            input_type=self.input_type,
            output_type=self.output_type,
            present_type=self.present_type,
            args=[arg.model_copy() for arg in self.args],
        )

    @abstractmethod
    async def run(self, input: Any, args: Sequence[Any]) -> Any:
        ...


class FetchOperation(Operation):
    """Hits a URL with the configured method, payload and headers."""

    name = "Fetch"
    description = "\n".join(
        [
            "Use the Fetch API to hit a URL with the method and payload you choose.",
            "",
            "The payload field allows you to override the request body even when the recipe input is used for the URL.",
            "",
            "Headers can be added line by line, and the return type lets you keep the response as text or raw bytes.",
        ]
    )
    info_url = "https://developer.mozilla.org/docs/Web/API/Fetch_API"

    def __init__(
        self,
        transport: HttpTransport | None = None,
        *,
        settings: AppSettings | None = None,
    ) -> None:
        super().__init__()
        self._transport = transport
        self._settings = settings
        self.args = [
            ArgumentSpec(name="Method", type="option", value=[m.value for m in HttpMethod]),
            ArgumentSpec(name="Payload", type="text", value="", rows=4),
            ArgumentSpec(name="Headers", type="text", value="", rows=4),
            ArgumentSpec(name="Return type", type="option", value=[r.value for r in ReturnType]),
        ]

    async def run(self, input: Any, args: Sequence[Any]) -> str | list[int]:
        """Recipe contract: returns the raw value and updates the declared type.

        An empty (or whitespace-only) URL is a no-op: returns "" without
        touching the network or the declared output type.
        """

        target_url = (input or "").strip()
        if not target_url:
            return ""

        result = await self._fetch(target_url, self._parse_args(args), before_read=self._declare_output)
        return result.value

    async def execute(self, input: Any, args: Sequence[Any]) -> FetchResult:
        """Same flow as `run`, returning a tagged result and leaving metadata alone."""

        target_url = (input or "").strip()
        if not target_url:
            return FetchResult(output_type=OutputType.STRING, value="")

        return await self._fetch(target_url, self._parse_args(args))

    def _declare_output(self, output_type: OutputType) -> None:
        self.output_type = output_type
        self.present_type = output_type

    @staticmethod
    def _parse_args(args: Sequence[Any]) -> FetchArgs:
        try:
            return FetchArgs.from_args(list(args or []))
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidArgumentError(f"Invalid arguments: {details}") from exc

    def _resolve_transport(self) -> HttpTransport:
        transport = self._transport
        if transport is None:
            transport = default_transport(self._settings)
        if transport is None or not isinstance(transport, HttpTransport):
            raise ConfigurationError()
        return transport

    async def _fetch(
        self,
        url: str,
        args: FetchArgs,
        *,
        before_read: Callable[[OutputType], None] | None = None,
    ) -> FetchResult:
        transport = self._resolve_transport()
        spec = build_request_spec(
            url=url,
            method=args.method,
            payload=args.payload,
            headers=parse_headers(args.headers_text),
        )
        logger.debug("%s %s (%d headers)", spec.method.value, spec.url, len(spec.headers))

        try:
            response = await transport.send(spec)

            if response.status_code == 0 and response.response_type == "opaque":
                await _close_quietly(response)
                raise BlockedResponseError()

            output_type = args.return_type.output_type()
            if before_read is not None:
                before_read(output_type)

            if output_type is OutputType.BYTE_ARRAY:
                value: str | list[int] = list(await response.read_bytes())
            else:
                value = await response.text()
        except OperationError:
            raise
        except Exception as exc:
            logger.warning("%s %s failed: %s", spec.method.value, spec.url, exc)
            raise TransportError(exc) from exc

        return FetchResult(output_type=output_type, value=value)


async def _close_quietly(response: Any) -> None:
    # `aclose` es opcional en TransportResponse; un fallo al cerrar no tapa el error original.
    close = getattr(response, "aclose", None)
    if close is None:
        return
    try:
        await close()
    except Exception as exc:
        logger.debug("Closing unread response failed: %s", exc)
