# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Local test server based on http.server.

:func:`start_server` binds a server to a random loopback port and sends every request to
a handler supplied by the test. The returned :class:`StubServer` counts the requests it
served. Closing it shuts the server down and asserts that it was called and that no
handler failed::

    with start_server(lambda request: Response(body="ok")) as server:
        requests.get(server.url("/x"))
        server.assert_hits(1)
"""

from __future__ import annotations

import asyncio
import inspect
import queue
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from logging import getLogger
from typing import TYPE_CHECKING

from requests.structures import CaseInsensitiveDict

from . import StubHttpError, __version__
from .base.constants import (
    BIND_THREAD_NAME,
    DEFAULT_SHUTDOWN_TIMEOUT,
    EPHEMERAL_PORT,
    LOOPBACK_HOST,
    POLL_INTERVAL,
    SERVER_THREAD_NAME,
    ServerState,
)
from .common.sync import HitCounter, OneShot
from .exceptions import (
    BindError,
    HitCountMismatchError,
    PanickedRequestsError,
    ServerNotCalledError,
    ServerPanicError,
)
from .models import Request, Response

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType
    from typing import Any, Awaitable, Callable, Union

    Handler = Callable[[Request], Union[Response, str, bytes, Awaitable[Any]]]

log = getLogger(__name__)


async def _resolve(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class StubRequestHandler(BaseHTTPRequestHandler):
    server: StubHTTPServer
    server_version = f"stubhttp/{__version__}"

    def read_request(self) -> Request:
        return Request(
            method=self.command,
            path=self.path,
            headers=CaseInsensitiveDict(self.headers.items()),
            body=self.read_body(),
        )

    def read_body(self) -> bytes:
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            return b"".join(self._read_chunks())
        length = int(self.headers.get("Content-Length") or 0)
        if length < 0:
            raise ValueError(f"invalid Content-Length: {length}")
        return self.rfile.read(length) if length else b""

    def _read_chunks(self) -> Iterator[bytes]:
        while True:
            size = int(self.rfile.readline().split(b";", 1)[0].strip(), 16)
            if size == 0:
                break
            yield self.rfile.read(size)
            self.rfile.readline()
        # trailers, up to the blank line ending the body
        while self.rfile.readline() not in (b"\r\n", b"\n", b""):
            pass

    def dispatch(self) -> None:
        response = self.server.dispatch(self.read_request)

        content = response.content
        headers = CaseInsensitiveDict(response.headers)
        headers.setdefault("Content-Length", str(len(content)))
        self.send_response(response.status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(content)

    do_GET = dispatch
    do_HEAD = dispatch
    do_POST = dispatch
    do_PUT = dispatch
    do_PATCH = dispatch
    do_DELETE = dispatch
    do_OPTIONS = dispatch

    def log_message(self, format: str, *args: Any) -> None:
        log.debug("%s - %s", self.address_string(), format % args)


class StubHTTPServer(ThreadingHTTPServer):
    daemon_threads = True  # a hung handler must not keep the interpreter alive
    allow_reuse_address = True  # Good for tests

    def __init__(self, server_address: tuple[str, int], handler: Handler):
        super().__init__(server_address, StubRequestHandler)
        self.handler = handler
        self.total_hits = HitCounter()
        self.successful_hits = HitCounter()
        self._state = ServerState.RUNNING
        self._state_lock = threading.Lock()
        # only touched from the serving thread
        self._request_threads: list[threading.Thread] = []

    @property
    def state(self) -> ServerState:
        with self._state_lock:
            return self._state

    def advance(self, state: ServerState) -> bool:
        """Move to ``state`` if it comes later than the current one.

        :return: True if the state changed.
        """
        order = list(ServerState)
        with self._state_lock:
            if order.index(state) <= order.index(self._state):
                return False
            self._state = state
            return True

    def process_request(self, request: Any, client_address: tuple[str, int]) -> None:
        # daemon threads are tracked too so server_close can drain them
        thread = threading.Thread(
            target=self.process_request_thread,
            args=(request, client_address),
            daemon=self.daemon_threads,
        )
        self._request_threads = [t for t in self._request_threads if t.is_alive()]
        self._request_threads.append(thread)
        thread.start()

    def server_close(self) -> None:
        super().server_close()
        for thread in self._request_threads:
            thread.join()
        self._request_threads.clear()

    def dispatch(self, read_request: Callable[[], Request]) -> Response:
        # counted before the request is read and the handler runs, so a malformed
        # request or an aborted handler leaves total > successful
        self.total_hits.increment()
        result = self.handler(read_request())
        if inspect.isawaitable(result):
            result = asyncio.run(_resolve(result))
        response = Response.coerce(result)
        self.successful_hits.increment()
        return response

    def handle_error(self, request: Any, client_address: tuple[str, int]) -> None:
        # no error response is sent; the connection is closed once this returns
        host, port = client_address[:2]
        log.error("request handler failed for %s:%s", host, port, exc_info=True)


class StubServer:
    """Handle on a running test server.

    Use it as a context manager, or call :meth:`close` when the test is done with it.
    """

    def __init__(
        self,
        httpd: StubHTTPServer,
        completed: queue.Queue,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
    ):
        self._httpd = httpd
        self._address: tuple[str, int] = httpd.server_address[:2]
        self._total_hits = httpd.total_hits
        self._successful_hits = httpd.successful_hits
        # receives one item when the serving thread exits without raising
        self._completed = completed
        self._shutdown_trigger: OneShot | None = OneShot(self._request_shutdown)
        self._closed = False
        self.shutdown_timeout = shutdown_timeout

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.base_url()} ({self.state})>"

    def __enter__(self) -> StubServer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close(skip_assertions=exc_type is not None)

    @property
    def address(self) -> tuple[str, int]:
        return self._address

    @property
    def state(self) -> ServerState:
        return self._httpd.state

    @property
    def total_hits(self) -> int:
        return self._total_hits.value

    @property
    def successful_hits(self) -> int:
        return self._successful_hits.value

    def base_url(self) -> str:
        return f"http://{self.host()}:{self.port()}"

    def url(self, path: str) -> str:
        return f"{self.base_url()}{path}"

    def host(self) -> str:
        return LOOPBACK_HOST

    def port(self) -> int:
        return self._address[1]

    def assert_hits(self, hits: int) -> None:
        successful_hits = self.successful_hits
        if successful_hits != hits:
            raise HitCountMismatchError(hits, successful_hits)

    def shutdown(self) -> None:
        """Ask the server to stop accepting connections and finish in-flight requests."""
        trigger, self._shutdown_trigger = self._shutdown_trigger, None
        if trigger is not None:
            trigger.fire()

    def _request_shutdown(self) -> None:
        log.debug("Shutting down test server on port %s", self.port())
        self._httpd.advance(ServerState.SHUTDOWN_REQUESTED)
        self._httpd.shutdown()

    def close(self, skip_assertions: bool = False) -> None:
        """Shut the server down and assert it served every request it received.

        :param skip_assertions: Only shut down. Pass True when the test has already
            failed so the original failure is not masked.
        :raises ServerNotCalledError: No request reached the server.
        :raises PanickedRequestsError: One or more handlers raised.
        :raises ServerPanicError: The serving thread did not finish in time.
        """
        if self._closed:
            return
        self._closed = True
        self.shutdown()

        if skip_assertions:
            log.debug("Skipping test server assertions for port %s", self.port())
            return

        total_hits = self.total_hits
        failed_hits = total_hits - self.successful_hits
        if total_hits <= 0:
            raise ServerNotCalledError()
        if failed_hits != 0:
            raise PanickedRequestsError(failed_hits)
        try:
            self._completed.get(timeout=self.shutdown_timeout)
        except queue.Empty:
            raise ServerPanicError(self.shutdown_timeout) from None


def _serve(httpd: StubHTTPServer, completed: queue.Queue) -> None:
    with httpd:
        httpd.serve_forever(poll_interval=POLL_INTERVAL)
        httpd.advance(ServerState.DRAINING)
    # leaving the block joined every request thread
    httpd.advance(ServerState.STOPPED)
    completed.put(None)


def _bind(handler: Handler, shutdown_timeout: float, started: queue.Queue) -> None:
    try:
        httpd = StubHTTPServer((LOOPBACK_HOST, EPHEMERAL_PORT), handler)
    except OSError as err:
        started.put(err)
        return

    host, port = httpd.server_address[:2]
    completed: queue.Queue = queue.Queue(maxsize=1)
    threading.Thread(
        target=_serve,
        args=(httpd, completed),
        name=SERVER_THREAD_NAME,
        daemon=True,
    ).start()
    log.debug("Serving HTTP on %s port %s (http://%s:%s/) ...", host, port, host, port)
    started.put(StubServer(httpd, completed, shutdown_timeout))


def start_server(
    handler: Handler,
    *,
    shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
) -> StubServer:
    """
    Run a test server on a random loopback port and return a handle to it once it is
    listening.

    :param handler: Called with a :class:`~stubhttp.models.Request` for every request,
        possibly from several threads at once. Returns a
        :class:`~stubhttp.models.Response`, ``str`` or ``bytes``, or an awaitable of one.
    :param shutdown_timeout: Seconds :meth:`StubServer.close` waits for the server to
        finish.
    :raises BindError: The listening socket could not be bound.
    """
    started: queue.Queue = queue.Queue(maxsize=1)
    binder = threading.Thread(
        target=_bind,
        args=(handler, shutdown_timeout, started),
        name=BIND_THREAD_NAME,
        daemon=True,
    )
    binder.start()
    binder.join()

    try:
        result = started.get_nowait()
    except queue.Empty:
        raise StubHttpError("test server failed to start") from None
    if isinstance(result, OSError):
        raise BindError(LOOPBACK_HOST, result) from result
    return result
