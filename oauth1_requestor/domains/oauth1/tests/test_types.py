"""Unit tests for OAuth1 value types."""

import httpx
import pytest

from oauth1_requestor.domains.oauth1.types import PreparedRequest, RequestParameter, as_parameters


def test_as_parameters_coerces_tuples_in_order():
    params = as_parameters([("b", "2"), RequestParameter("a", "1")])
    assert params == [RequestParameter("b", "2"), RequestParameter("a", "1")]


@pytest.mark.parametrize("empty", [None, [], ()])
def test_as_parameters_empty(empty):
    assert as_parameters(empty) == []


def test_prepared_request_accepts_plain_inputs():
    request = PreparedRequest("https://api.example.com/x", {"Accept": "text/plain"})
    assert isinstance(request.url, httpx.URL)
    assert isinstance(request.headers, httpx.Headers)
    assert request.headers["accept"] == "text/plain"


def test_with_header_returns_copy():
    original = PreparedRequest("https://api.example.com/x")

    copy = original.with_header("Authorization", "OAuth a=\"b\"")

    assert copy is not original
    assert "Authorization" not in original.headers
    assert copy.headers["Authorization"] == 'OAuth a="b"'


def test_headers_not_shared_between_copies():
    headers = httpx.Headers({"X-A": "1"})
    request = PreparedRequest("https://api.example.com/x", headers)

    headers["X-A"] = "2"

    assert request.headers["X-A"] == "1"


def test_with_query_encodes_reserved_characters():
    request = PreparedRequest("https://api.example.com/x").with_query(
        [RequestParameter("q", "a&b"), RequestParameter("empty", "")]
    )
    assert request.url.params.multi_items() == [("q", "a&b"), ("empty", "")]
