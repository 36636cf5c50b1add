"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de los argumentos sueltos que llegan desde el recipe
  (strings posiblemente vacíos) en un único punto.
- Los modelos describen *qué* es una petición, no *cómo* se envía.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict


class HttpMethod(str, Enum):
    """Verbos soportados por la operación (mismo orden que en el selector)."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    @property
    def allows_body(self) -> bool:
        return self not in (HttpMethod.GET, HttpMethod.HEAD)


class ReturnType(str, Enum):
    """Representación pedida por el usuario para la respuesta."""

    STRING = "String"
    BYTES = "Bytes"

    def output_type(self) -> "OutputType":
        return OutputType.BYTE_ARRAY if self is ReturnType.BYTES else OutputType.STRING


class OutputType(str, Enum):
    """Tipo declarado que el pipeline usa para interpretar la salida."""

    STRING = "string"
    BYTE_ARRAY = "byteArray"


class RequestSpec(BaseModel):
    """Configuración de una única petición (se construye por invocación)."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="URL destino (ya recortada).")
    method: HttpMethod = Field(default=HttpMethod.GET)
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers parseados; un único valor por nombre.",
    )
    body: str | None = Field(
        default=None,
        description="Cuerpo de la petición; solo si el método lo admite.",
    )
    cache: str = Field(default="no-cache", frozen=True)

    @model_validator(mode="after")
    def _body_only_when_allowed(self) -> "RequestSpec":
        if self.body is not None and (not self.method.allows_body or self.body == ""):
            raise ValueError(f"{self.method.value} request cannot carry a body")
        return self


class FetchArgs(BaseModel):
    """Argumentos posicionales del recipe: [method, payload, headers, return type]."""

    method: HttpMethod = HttpMethod.GET
    payload: str = ""
    headers_text: str = ""
    return_type: ReturnType = ReturnType.STRING

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("payload", "headers_text", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_args(cls, args: list[Any] | tuple[Any, ...]) -> "FetchArgs":
        names = ("method", "payload", "headers_text", "return_type")
        return cls.model_validate(dict(zip(names, args)))


class FetchResult(BaseModel):
    """Salida etiquetada: el tag indica cómo interpretar `value`."""

    output_type: OutputType
    value: str | list[int]

    @property
    def is_bytes(self) -> bool:
        return self.output_type is OutputType.BYTE_ARRAY

    def as_bytes(self) -> bytes:
        if isinstance(self.value, str):
            return self.value.encode("utf-8")
        return bytes(self.value)


class ArgumentSpec(BaseModel):
    """Declaración de un argumento para las UIs de configuración."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., description="'option' (selector cerrado) o 'text'.")
    value: str | list[str] = Field(
        ...,
        description="Valor por defecto, o lista de opciones si type == 'option'.",
    )
    rows: int | None = Field(default=None, ge=1)

    @property
    def default(self) -> str:
        if isinstance(self.value, list):
            return self.value[0]
        return self.value


class OperationMetadata(BaseModel):
    """Snapshot de la metadata que consume el motor de recipes."""

    name: str
    module: str
    description: str
    info_url: str
    input_type: str
    output_type: OutputType
    present_type: OutputType
    args: list[ArgumentSpec] = Field(default_factory=list)
