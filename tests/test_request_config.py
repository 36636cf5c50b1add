import pytest
from pydantic import ValidationError

from core.domain.errors import HeaderParseError
from core.domain.models import HttpMethod, RequestSpec
from core.services.request_config import build_request_spec, parse_headers


def test_parse_headers_basic_block():
    headers = parse_headers("Accept: application/json\nX-Trace-Id: abc123")

    assert headers == {"Accept": "application/json", "X-Trace-Id": "abc123"}


def test_parse_headers_last_duplicate_wins():
    assert parse_headers("A: 1\nA: 2") == {"A": "2"}


def test_parse_headers_duplicates_are_case_insensitive():
    headers = parse_headers("x-token: old\nX-Token: new")

    assert headers == {"X-Token": "new"}


def test_parse_headers_crlf_and_blank_lines():
    text = "\r\n  Accept: */*  \r\n\r\n   \nUser-Agent:  probe/1.0\r\n"

    assert parse_headers(text) == {"Accept": "*/*", "User-Agent": "probe/1.0"}


def test_parse_headers_splits_on_first_colon_only():
    headers = parse_headers("Referer: https://example.com:8443/path")

    assert headers == {"Referer": "https://example.com:8443/path"}


def test_parse_headers_empty_value_is_allowed():
    assert parse_headers("X-Foo:") == {"X-Foo": ""}


def test_parse_headers_empty_text():
    assert parse_headers("") == {}
    assert parse_headers("  \n \r\n") == {}


def test_parse_headers_missing_colon_fails_with_line():
    with pytest.raises(HeaderParseError) as exc_info:
        parse_headers("Accept: */*\nX-Foo")

    assert exc_info.value.line == "X-Foo"
    assert str(exc_info.value) == "Could not parse header in line: X-Foo"


def test_parse_headers_empty_name_fails():
    with pytest.raises(HeaderParseError) as exc_info:
        parse_headers(": value")

    assert exc_info.value.line == ": value"


@pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.HEAD])
def test_build_request_spec_drops_payload_for_get_and_head(method):
    spec = build_request_spec(url="https://example.com", method=method, payload="ignored", headers={})

    assert spec.body is None


@pytest.mark.parametrize(
    "method",
    [HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH, HttpMethod.DELETE, HttpMethod.OPTIONS],
)
def test_build_request_spec_attaches_payload_verbatim(method):
    payload = '  {"a": 1}\n'

    spec = build_request_spec(url="https://example.com", method=method, payload=payload, headers={})

    assert spec.body == payload


@pytest.mark.parametrize(
    "method",
    [HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH, HttpMethod.DELETE, HttpMethod.OPTIONS],
)
def test_build_request_spec_empty_payload_means_no_body(method):
    spec = build_request_spec(url="https://example.com", method=method, payload="", headers={})

    assert spec.body is None


def test_build_request_spec_always_no_cache():
    spec = build_request_spec(
        url="https://example.com",
        method=HttpMethod.GET,
        payload="",
        headers={"Accept": "*/*"},
    )

    assert spec.cache == "no-cache"
    assert spec.headers == {"Accept": "*/*"}


def test_request_spec_rejects_body_on_get():
    with pytest.raises(ValidationError):
        RequestSpec(url="https://example.com", method=HttpMethod.GET, body="x")
