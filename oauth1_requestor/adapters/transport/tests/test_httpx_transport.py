"""Tests for HttpxTransport against httpx.MockTransport.

Covers:
- success, HTTP status errors, network errors and httpx timeouts
- raw and multipart bodies
- signed end-to-end dispatch through OAuth1Requestor
- aclose cancelling pending sends
"""

import asyncio

import httpx
import pytest

from oauth1_requestor.adapters.transport.httpx_transport import HttpxTransport
from oauth1_requestor.core.exceptions import RequestError
from oauth1_requestor.domains.oauth1.operation import OperationState
from oauth1_requestor.domains.oauth1.requestor import OAuth1Requestor
from oauth1_requestor.domains.oauth1.types import (
    HttpOperation,
    MultipartFile,
    MultipartPayload,
    NetworkErrorKind,
    PreparedRequest,
    RequestParameter,
)

URL = "https://api.example.com/resource"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestOutcomes:
    @pytest.mark.asyncio
    async def test_success_finishes(self):
        async with _client(lambda request: httpx.Response(200, content=b"ok")) as client:
            transport = HttpxTransport(client)
            op = transport.get(PreparedRequest(URL))

            response = await op.wait()

        assert response.status_code == 200
        assert response.content == b"ok"
        assert op.state is OperationState.FINISHED
        assert op.operation is HttpOperation.GET

    @pytest.mark.asyncio
    async def test_error_status_reported_with_response(self):
        async with _client(lambda request: httpx.Response(401, content=b"bad sig")) as client:
            op = HttpxTransport(client).get(PreparedRequest(URL))

            with pytest.raises(RequestError) as exc_info:
                await op.wait()

        error = exc_info.value.error
        assert error.kind is NetworkErrorKind.HTTP_STATUS
        assert error.response.status_code == 401
        assert error.response.content == b"bad sig"

    @pytest.mark.asyncio
    async def test_network_error_passed_through(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            op = HttpxTransport(client).get(PreparedRequest(URL))
            errors = []
            op.on_error(errors.append)

            with pytest.raises(RequestError):
                await op.wait()

        assert len(errors) == 1
        assert errors[0].kind is NetworkErrorKind.NETWORK
        assert isinstance(errors[0].cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_httpx_timeout_reported_as_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        async with _client(handler) as client:
            op = HttpxTransport(client).get(PreparedRequest(URL))

            with pytest.raises(RequestError) as exc_info:
                await op.wait()

        assert exc_info.value.kind is NetworkErrorKind.TIMEOUT
        assert isinstance(exc_info.value.error.cause, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_unexpected_exception_settles_as_network_error(self):
        def handler(request):
            raise ValueError("broken transport hook")

        async with _client(handler) as client:
            op = HttpxTransport(client).get(PreparedRequest(URL))

            with pytest.raises(RequestError) as exc_info:
                await op.wait()

        assert op.state is OperationState.FAILED
        assert exc_info.value.kind is NetworkErrorKind.NETWORK
        assert isinstance(exc_info.value.error.cause, ValueError)


class TestBodies:
    @pytest.mark.asyncio
    async def test_raw_bodies_sent_unchanged(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.content, request.headers.get("X-Trace")))
            return httpx.Response(204)

        async with _client(handler) as client:
            transport = HttpxTransport(client)
            request = PreparedRequest(URL, {"X-Trace": "abc"})
            await transport.post(request, b"post-body").wait()
            await transport.put(request, b"put-body").wait()

        assert seen == [("POST", b"post-body", "abc"), ("PUT", b"put-body", "abc")]

    @pytest.mark.asyncio
    async def test_multipart_body_encoded(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        payload = MultipartPayload(
            fields=[RequestParameter("title", "cat")],
            files=[MultipartFile("media", "cat.png", b"PNGDATA", "image/png")],
        )

        async with _client(handler) as client:
            await HttpxTransport(client).post(PreparedRequest(URL), payload).wait()

        request = seen[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="title"' in request.content
        assert b"cat" in request.content
        assert b'filename="cat.png"' in request.content
        assert b"PNGDATA" in request.content

    @pytest.mark.asyncio
    async def test_empty_multipart_payload_rejected_before_send(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        async with _client(handler) as client:
            transport = HttpxTransport(client)
            with pytest.raises(ValueError):
                transport.post(PreparedRequest(URL), MultipartPayload())

        assert seen == []
        assert transport._pending == {}


class TestSignedDispatch:
    @pytest.mark.asyncio
    async def test_get_through_requestor(self, authenticator):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        async with _client(handler) as client:
            requestor = OAuth1Requestor(HttpxTransport(client), authenticator, timeout_seconds=5)
            op = requestor.get(PreparedRequest(URL), [("foo", "bar")])
            response = await op.wait()

        assert response.json() == {"ok": True}
        sent = seen[0]
        assert str(sent.url) == "https://api.example.com/resource?foo=bar"
        authorization = sent.headers.get_list("Authorization")
        assert authorization[0].startswith('OAuth oauth_consumer_key="consumer-key"')
        assert op.timeout_guard.state.value == "disarmed"


class TestClose:
    @pytest.mark.asyncio
    async def test_aclose_cancels_pending_operations(self):
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200)

        async with _client(handler) as client:
            transport = HttpxTransport(client)
            op = transport.get(PreparedRequest(URL))
            await asyncio.sleep(0)

            await transport.aclose()

        assert op.error.kind is NetworkErrorKind.CANCELED

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = HttpxTransport()
        async with transport:
            pass

        assert transport._client.is_closed
