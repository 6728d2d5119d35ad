"""httpx-backed transport.

Each call builds an ``httpx.Request``, wraps it in an ``InFlightOperation``
and schedules ``client.send`` as a task on the running event loop. The
method returns immediately; outcomes arrive on the handle:

- status < 400            -> finished
- status >= 400           -> error, kind ``http_status`` (response attached)
- httpx.TimeoutException  -> error, kind ``timeout``
- any other httpx.HTTPError -> error, kind ``network``
- any other exception     -> error, kind ``network``

The original exception or response is attached to the error unchanged.
"""

import asyncio
from typing import Optional, Union

import httpx

from oauth1_requestor.core.logging import logger
from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.types import (
    HttpOperation,
    MultipartPayload,
    NetworkErrorKind,
    OperationError,
    PreparedRequest,
)


class HttpxTransport:
    """Non-blocking transport over ``httpx.AsyncClient``.

    Usage:
        async with HttpxTransport() as transport:
            op = transport.get(PreparedRequest("https://api.example.com/resource"))
            response = await op.wait()
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        """Initialize the transport.

        Args:
            client: Client to send with. When omitted, the transport creates
                and owns one with httpx timeouts disabled, leaving timeouts to
                the requestor's guard.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=None)
        self._pending: dict[asyncio.Task, InFlightOperation] = {}

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cancel pending sends (reported as ``canceled``) and close an owned client."""
        tasks = list(self._pending)
        for op in list(self._pending.values()):
            op.abort()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()

    def get(self, request: PreparedRequest) -> InFlightOperation:
        return self._dispatch(request, HttpOperation.GET)

    def post(
        self, request: PreparedRequest, body: Union[bytes, MultipartPayload]
    ) -> InFlightOperation:
        return self._dispatch(request, HttpOperation.POST, body)

    def put(self, request: PreparedRequest, body: bytes) -> InFlightOperation:
        return self._dispatch(request, HttpOperation.PUT, body)

    def _dispatch(
        self,
        request: PreparedRequest,
        operation: HttpOperation,
        body: Union[bytes, MultipartPayload, None] = None,
    ) -> InFlightOperation:
        http_request = self._build_request(request, operation, body)
        op = InFlightOperation(request, operation)
        task = asyncio.get_running_loop().create_task(self._send(op, http_request))
        self._pending[task] = op
        task.add_done_callback(self._forget)
        op.attach_task(task)
        return op

    def _forget(self, task: asyncio.Task) -> None:
        self._pending.pop(task, None)

    def _build_request(
        self,
        request: PreparedRequest,
        operation: HttpOperation,
        body: Union[bytes, MultipartPayload, None],
    ) -> httpx.Request:
        if isinstance(body, MultipartPayload):
            if not body.fields and not body.files:
                raise ValueError("Multipart payload needs at least one field or file")
            # Form fields go in as filename-less parts so the body is always multipart
            files = [(p.name, (None, p.value.encode("utf-8"))) for p in body.fields]
            files.extend((f.name, (f.filename, f.content, f.content_type)) for f in body.files)
            return self._client.build_request(
                operation.value, request.url, headers=request.headers, files=files
            )
        return self._client.build_request(
            operation.value, request.url, headers=request.headers, content=body
        )

    async def _send(self, op: InFlightOperation, http_request: httpx.Request) -> None:
        try:
            response = await self._client.send(http_request)
        except asyncio.CancelledError:
            op.emit_error(OperationError(kind=NetworkErrorKind.CANCELED, message="Send cancelled"))
            raise
        except httpx.TimeoutException as exc:
            op.emit_error(
                OperationError(kind=NetworkErrorKind.TIMEOUT, message=str(exc), cause=exc)
            )
            return
        except httpx.HTTPError as exc:
            logger.debug(f"Transport error for {http_request.method} {http_request.url}: {exc}")
            op.emit_error(
                OperationError(kind=NetworkErrorKind.NETWORK, message=str(exc), cause=exc)
            )
            return
        except Exception as exc:
            logger.warning(
                f"Unexpected error sending {http_request.method} {http_request.url}: {exc!r}"
            )
            op.emit_error(
                OperationError(kind=NetworkErrorKind.NETWORK, message=str(exc), cause=exc)
            )
            return

        if response.is_error:
            op.emit_error(
                OperationError(
                    kind=NetworkErrorKind.HTTP_STATUS,
                    message=f"Server responded with {response.status_code}",
                    response=response,
                )
            )
        else:
            op.emit_finished(response)
