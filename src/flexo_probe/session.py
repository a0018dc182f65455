"""Session driver: one TCP connection, sequential exchanges, one deadline.

The exchanges run on a dedicated daemon thread so a silent or slow peer
cannot block the caller. The worker hands its result over exactly once
through a ``concurrent.futures.Future``; the caller waits on it up to the
session timeout and otherwise returns ``None``. The worker is not
cancelled on timeout. It is abandoned and closes its connection whenever
it finishes.
"""

from __future__ import annotations

import itertools
import socket
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

from .errors import ConnectionFailedError
from .logging import get_logger, session_context
from .models import (
    DEFAULT_TIMEOUT,
    ChunkPattern,
    ConnectionAddress,
    HttpGetResult,
    RequestSpec,
    SessionResult,
    SessionSpec,
)
from .wire.body import stream_body
from .wire.emitter import request_bytes, send_request
from .wire.framer import MAX_HEADER_SIZE, read_header
from .wire.headers import parse_header

logger = get_logger(__name__)

# Socket operations outlive the session deadline by this much, then fail.
_SOCKET_TIMEOUT_GRACE = 1.0

_session_ids = itertools.count(1)


class SessionDriver:
    """Runs every request of a ``SessionSpec`` over a single connection.

    Example:
        ```python
        session = SessionSpec(
            connection=ConnectionAddress("localhost", 9999),
            requests=[RequestSpec("/a"), RequestSpec("/b")],
        )
        results = SessionDriver(session, ChunkPattern(chunk_size=1)).run()
        if results is None:
            ...  # no answer within session.timeout
        ```
    """

    def __init__(
        self,
        session: SessionSpec,
        chunk_pattern: ChunkPattern | None = None,
        max_header_size: int = MAX_HEADER_SIZE,
    ) -> None:
        """Initialize the driver.

        Args:
            session: Address, requests and timeout of the session.
            chunk_pattern: Chunking applied to every request header. When
                ``None``, each header is sent in a single write.
            max_header_size: Upper bound on response header bytes.
        """
        self._session = session
        self._chunk_pattern = chunk_pattern
        self._max_header_size = max_header_size
        self.session_id = next(_session_ids)

    @property
    def session(self) -> SessionSpec:
        return self._session

    def run(self) -> SessionResult | None:
        """Run the session and wait for its outcome.

        Returns:
            One ``HttpGetResult`` per request, in request order, or ``None``
            if the worker did not finish within ``session.timeout``.

        Raises:
            ProbeError: If the worker failed (connection error, malformed
                header, short body) before the deadline.
        """
        address = self._session.connection
        timeout = self._session.timeout
        logger.info(
            "session_started",
            address=str(address),
            requests=len(self._session.requests),
            timeout=timeout,
        )
        start_time = time.monotonic()
        future = self.start()
        try:
            results = future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning("session_timed_out", address=str(address), timeout=timeout)
            return None

        logger.info(
            "session_completed",
            address=str(address),
            results=len(results),
            duration=round(time.monotonic() - start_time, 3),
        )
        return results

    def start(self) -> Future[SessionResult]:
        """Spawn the worker thread and return the future it will complete."""
        future: Future[SessionResult] = Future()
        future.set_running_or_notify_cancel()
        worker = threading.Thread(
            target=self._work,
            args=(future,),
            name=f"flexo-probe-session-{self._session.connection}",
            daemon=True,
        )
        worker.start()
        return future

    def _work(self, future: Future[SessionResult]) -> None:
        with session_context(self._session.connection, self.session_id):
            try:
                results = self._run_exchanges()
            except Exception as e:
                logger.warning(
                    "session_worker_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                future.set_exception(e)
            else:
                future.set_result(results)

    def _run_exchanges(self) -> SessionResult:
        address = self._session.connection
        try:
            sock = socket.create_connection(
                (address.host, address.port),
                timeout=self._session.timeout + _SOCKET_TIMEOUT_GRACE,
            )
        except OSError as e:
            raise ConnectionFailedError(f"Cannot connect to {address}: {e}") from e

        with sock:
            return [self.exchange(sock, request) for request in self._session.requests]

    def exchange(self, sock: socket.socket, request: RequestSpec) -> HttpGetResult:
        """Send ``request`` on ``sock`` and read its complete response."""
        data = request_bytes(request, self._session.connection)
        pattern = self._chunk_pattern or ChunkPattern.whole(data)
        send_request(sock, data, pattern)

        header = parse_header(read_header(sock, self._max_header_size))
        body = None
        if header.content_length > 0:
            body = stream_body(sock, header.content_length)
        return HttpGetResult(header=header, body=body)


def run_session(
    session: SessionSpec,
    chunk_pattern: ChunkPattern | None = None,
) -> SessionResult | None:
    """Run ``session`` and return its ordered results, or ``None`` on timeout."""
    return SessionDriver(session, chunk_pattern).run()


def http_get(
    address: ConnectionAddress,
    request: RequestSpec,
    chunk_pattern: ChunkPattern | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> HttpGetResult | None:
    """Single-request session.

    Returns:
        The result of the one exchange, or ``None`` on timeout.
    """
    session = SessionSpec(connection=address, requests=(request,), timeout=timeout)
    results = run_session(session, chunk_pattern)
    if results is None:
        return None
    return results[0]
