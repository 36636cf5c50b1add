"""
Shared pytest fixtures for recipe-fetch tests.

Provides an in-memory transport so the Fetch operation can be exercised
without touching the network.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from core.config import AppSettings
from core.domain.models import RequestSpec


class FakeResponse:
    """TransportResponse double with a single-read body."""

    def __init__(
        self,
        body: bytes = b"",
        status_code: int = 200,
        response_type: str = "basic",
        read_error: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.response_type = response_type
        self._body = body
        self._read_error = read_error
        self.reads = 0

    def _consume(self) -> bytes:
        self.reads += 1
        if self.reads > 1:
            raise RuntimeError("Body has already been read")
        if self._read_error is not None:
            raise self._read_error
        return self._body

    async def text(self) -> str:
        return self._consume().decode("utf-8")

    async def read_bytes(self) -> bytes:
        return self._consume()


@dataclass
class FakeTransport:
    """HttpTransport double: records every RequestSpec it receives."""

    response: Optional[FakeResponse] = None
    error: Optional[Exception] = None
    calls: List[RequestSpec] = field(default_factory=list)

    async def send(self, spec: RequestSpec) -> FakeResponse:
        self.calls.append(spec)
        if self.error is not None:
            raise self.error
        return self.response or FakeResponse()

    @property
    def last(self) -> RequestSpec:
        assert self.calls, "no request was sent"
        return self.calls[-1]


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return AppSettings(_env_file=None)


@pytest.fixture
def fake_transport():
    return FakeTransport(response=FakeResponse(body=b"hello world"))
