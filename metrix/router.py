"""WSGI application routing requests to handlers, and a server to run it."""

from __future__ import annotations

import logging
import re
import signal
import threading
import time
from collections.abc import Callable, Iterable
from http import HTTPStatus
from socketserver import ThreadingMixIn
from urllib.parse import unquote_plus
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from metrix import handlers
from metrix.model import Store, default_store

log = logging.getLogger(__name__)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})
_MAX_FORM_BYTES = 10 << 20

_QUERY_ROUTES = {
    "/metrics": handlers.metrics,
    "/metrics/form": handlers.metric_form_fields,
    "/entries": handlers.entries,
    "/entries/values": handlers.entries_values_table,
}


def _parse_pairs(text: str) -> tuple[dict[str, str], bool]:
    """Decode URL-encoded pairs, keeping the first value of each key.

    Returns the values and whether every pair was well formed.
    """
    values: dict[str, str] = {}
    well_formed = True
    for pair in text.split("&"):
        if not pair:
            continue
        if ";" in pair:
            well_formed = False
            continue
        key, _, value = pair.partition("=")
        if _BAD_ESCAPE.search(key) or _BAD_ESCAPE.search(value):
            well_formed = False
            continue
        values.setdefault(unquote_plus(key), unquote_plus(value))
    return values, well_formed


def _read_form(environ: dict) -> dict[str, str]:
    """Merge body and query parameters, body first; raise BadRequest if malformed."""
    query, ok = _parse_pairs(environ.get("QUERY_STRING", ""))
    if not ok:
        raise handlers.BadRequest("Invalid form")
    form = dict(query)
    method = environ.get("REQUEST_METHOD", "GET").upper()
    media_type = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
    if method in _FORM_METHODS and media_type == "application/x-www-form-urlencoded":
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            raise handlers.BadRequest("Invalid form") from None
        if length > _MAX_FORM_BYTES:
            raise handlers.BadRequest("Invalid form")
        raw = environ["wsgi.input"].read(length) if length > 0 else b""
        body, ok = _parse_pairs(raw.decode("utf-8", errors="replace"))
        if not ok:
            raise handlers.BadRequest("Invalid form")
        form.update(body)
    return form


def _status_line(code: int) -> str:
    status = HTTPStatus(code)
    return f"{status.value} {status.phrase}"


class App:
    """WSGI application serving the metrics site from a store."""

    def __init__(self, store: Store, clock: Callable[[], float] = time.time) -> None:
        self.store = store
        self.clock = clock
        self._lock = threading.Lock()

    def _dispatch(self, path: str, environ: dict) -> handlers.Response:
        if path == "/metrics/create":
            return handlers.create_metric(self.store, _read_form(environ))
        if path == "/entries/add":
            return handlers.add_entry(self.store, _read_form(environ), self.clock())
        query, _ = _parse_pairs(environ.get("QUERY_STRING", ""))
        handler = _QUERY_ROUTES.get(path, handlers.home)
        return handler(self.store, query)

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        path = environ.get("PATH_INFO") or "/"
        try:
            with self._lock:
                response = self._dispatch(path, environ)
        except handlers.BadRequest as error:
            body = f"{error.message}\n".encode("utf-8")
            start_response(
                _status_line(error.status),
                [
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("X-Content-Type-Options", "nosniff"),
                    ("Content-Length", str(len(body))),
                ],
            )
            return [body]
        body = response.body.encode("utf-8")
        start_response(
            _status_line(response.status),
            [
                ("Content-Type", response.content_type),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]


def create_app(store: Store | None = None) -> App:
    """Build the application over the given store, or over sample data."""
    return App(default_store() if store is None else store)


def _split_address(addr: str) -> tuple[str, int]:
    """Split "host:port" (host optional) into its parts; raise ValueError if invalid."""
    host, sep, port_text = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address {addr}: missing port in address")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port_text.isdigit() or not 0 <= int(port_text) <= 65535:
        raise ValueError(f"address {addr}: invalid port")
    return host, int(port_text)


class _ThreadingServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _LoggingHandler(WSGIRequestHandler):
    """Request handler that sends access lines to the module logger at debug level."""

    def log_message(self, format: str, *args: object) -> None:
        log.debug("%s - %s", self.address_string(), format % args)


def serve(addr: str = ":8080", store: Store | None = None) -> None:
    """Serve the site on ``addr`` until interrupted or terminated.

    Raises ValueError for a malformed address and OSError if it cannot be bound.
    """
    host, port = _split_address(addr)
    server = make_server(
        host,
        port,
        create_app(store),
        server_class=_ThreadingServer,
        handler_class=_LoggingHandler,
    )
    stop = threading.Event()
    signals = (signal.SIGINT, signal.SIGTERM)
    previous = {sig: signal.signal(sig, lambda *_: stop.set()) for sig in signals}
    worker = threading.Thread(target=server.serve_forever, daemon=True)
    log.info("Starting web server on %s", addr)
    worker.start()
    try:
        while not stop.wait(0.5):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        log.info("Shutting down server...")
        server.shutdown()
        server.server_close()
        worker.join(5)
    log.info("Server exited cleanly.")