# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Exoplanet location service.

Two hosts for the location pipeline (stdlib only):

- HTTP JSON API (ThreadingHTTPServer), one worker thread per request.
- Raw one-shot channel (ThreadingTCPServer): the client writes one JSON
  payload of at most MAX_REQUEST_BYTES, the server replies with the
  compact response JSON and closes, unless the request asked to
  stay_alive.

Usage:
    exofinder --serve                  # HTTP on 0.0.0.0:2222
    exofinder --serve --raw --port 2222
"""

import logging
import socketserver
import time
from dataclasses import dataclass
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Any, Callable

from exofinder.adapters.json_codec import (
    MAX_REQUEST_BYTES,
    JsonRequestCodec,
    RequestDecodeError,
)
from exofinder.domain.exoplanet import (
    DEFAULT_EXOPLANET,
    exoplanet_from_request,
    exoplanet_to_response,
)
from exofinder.domain.pipeline import handle_request, locate_exoplanet
from exofinder.domain.visualization import OBJ_ELEMENTS, generate_obj_data


logger = logging.getLogger(__name__)

_DEFAULT_SCREEN_WIDTH = 1920.0
_DEFAULT_SCREEN_HEIGHT = 1080.0
_MAX_BATCH_BYTES = 1 << 20
_MAX_BATCH_SIZE = 10_000


@dataclass(frozen=True)
class ServerConfig:
    """Listening address and request limits for the service."""

    host: str = "0.0.0.0"
    port: int = 2222
    max_request_bytes: int = MAX_REQUEST_BYTES
    max_batch_bytes: int = _MAX_BATCH_BYTES
    max_batch_size: int = _MAX_BATCH_SIZE
    raw: bool = False


class RequestTooLarge(ValueError):
    """Raised when a request body exceeds the configured limit."""


class ExoplanetHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the exoplanet location API."""

    # Set by create_exoplanet_server
    config: ServerConfig = ServerConfig()
    codec: JsonRequestCodec = JsonRequestCodec()
    clock: Callable[[], float] = staticmethod(time.time)

    def log_message(self, format: str, *args: Any) -> None:
        """Suppress default stderr logging."""
        logger.debug(format, *args)

    def _set_headers(
        self,
        status: int = 200,
        content_type: str = "application/json",
        content_length: int | None = None,
    ) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        if content_length is not None:
            self.send_header("Content-Length", str(content_length))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def _send_bytes(self, payload: bytes, status: int, content_type: str) -> None:
        self._set_headers(status, content_type, len(payload))
        self.wfile.write(payload)

    def _json_response(self, data: Any, status: int = 200) -> None:
        self._send_bytes(self.codec.encode_response(data), status, "application/json")

    def _error_response(self, status: int, message: str) -> None:
        self._json_response({"error": message}, status)

    def _read_body(self, limit: int) -> bytes:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError as e:
            raise RequestDecodeError(f"Invalid Content-Length: {e}") from e
        if length > limit:
            raise RequestTooLarge(
                f"Request body of {length} bytes exceeds {limit} bytes"
            )
        if length <= 0:
            return b""
        return self.rfile.read(length)

    # --- GET ---

    def do_GET(self) -> None:
        if self.path.rstrip("/") == "/api/defaults":
            self._json_response(exoplanet_to_response(DEFAULT_EXOPLANET))
            return
        self._error_response(404, "Not found")

    # --- POST ---

    def do_POST(self) -> None:
        path = self.path.rstrip("/")

        if path == "/api/exoplanet":
            self._handle_locate()
            return

        if path == "/api/visualization":
            self._handle_visualization()
            return

        self._error_response(404, "Not found")

    def _handle_locate(self) -> None:
        try:
            body = self._read_body(self.config.max_request_bytes)
            request = self.codec.decode_request(body)
        except RequestTooLarge as e:
            logger.warning("Rejected request: %s", e)
            self._error_response(413, str(e))
            return
        except RequestDecodeError as e:
            logger.warning("Rejected request: %s", e)
            self._error_response(400, str(e))
            return

        try:
            response = handle_request(request, clock=self.clock)
        except Exception as e:
            logger.exception("Location failed")
            self._error_response(500, f"Location failed: {e}")
            return
        if "error" in response:
            logger.info("Kepler solve failed for %s", response["name"])
        self._json_response(response)

    def _handle_visualization(self) -> None:
        try:
            body = self._read_body(self.config.max_batch_bytes)
            request = self.codec.decode_request(body)
            entries = request.get("exoplanets")
            if not isinstance(entries, list) or not entries:
                raise RequestDecodeError("'exoplanets' must be a non-empty array")
            if len(entries) > self.config.max_batch_size:
                raise RequestTooLarge(
                    f"Batch of {len(entries)} exceeds {self.config.max_batch_size}"
                )
            if not all(isinstance(entry, dict) for entry in entries):
                raise RequestDecodeError("Every exoplanet must be a JSON object")
            width = _number_or_default(request.get("width"), _DEFAULT_SCREEN_WIDTH)
            height = _number_or_default(request.get("height"), _DEFAULT_SCREEN_HEIGHT)
            element = request.get("element", "v")
            if element not in OBJ_ELEMENTS:
                raise RequestDecodeError(
                    f"'element' must be one of {OBJ_ELEMENTS}, got {element!r}"
                )
        except RequestTooLarge as e:
            logger.warning("Rejected visualization request: %s", e)
            self._error_response(413, str(e))
            return
        except RequestDecodeError as e:
            logger.warning("Rejected visualization request: %s", e)
            self._error_response(400, str(e))
            return

        try:
            planets = [
                locate_exoplanet(exoplanet_from_request(entry), clock=self.clock)
                for entry in entries
            ]
            text, size = generate_obj_data(planets, width, height, element=element)
        except Exception as e:
            logger.exception("Visualization failed")
            self._error_response(500, f"Visualization failed: {e}")
            return
        logger.debug("Generated %d OBJ points (%d bytes)", len(planets), size)
        self._send_bytes(text.encode("utf-8"), 200, "text/plain; charset=utf-8")

    # --- OPTIONS (CORS preflight) ---

    def do_OPTIONS(self) -> None:
        self._set_headers(204)


def _number_or_default(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


class ExoplanetChannelHandler(socketserver.BaseRequestHandler):
    """One-shot channel: read one payload, write one response, close."""

    # Set by create_channel_server
    config: ServerConfig = ServerConfig()
    codec: JsonRequestCodec = JsonRequestCodec()
    clock: Callable[[], float] = staticmethod(time.time)

    def handle(self) -> None:
        peer = self.client_address
        while True:
            payload = self.request.recv(self.config.max_request_bytes)
            if not payload:
                return
            try:
                request = self.codec.decode_request(payload)
            except RequestDecodeError as e:
                logger.warning("Aborting exchange with %s: %s", peer, e)
                return

            try:
                response = handle_request(request, clock=self.clock)
            except Exception:
                logger.exception("Location failed for %s; closing", peer)
                return
            self.request.sendall(self.codec.encode_response(response))
            if not response["stay_alive"]:
                return


class _ChannelServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True


def create_exoplanet_server(
    config: ServerConfig = ServerConfig(),
    clock: Callable[[], float] = time.time,
) -> ThreadingHTTPServer:
    """Create the HTTP JSON server.

    Args:
        config: Listening address and request limits.
        clock: Wall-clock source for requests without unix_time.

    Returns:
        ThreadingHTTPServer ready to serve_forever().
    """
    # Create handler class with shared state
    handler = type(
        "BoundExoplanetHandler",
        (ExoplanetHandler,),
        {
            "config": config,
            "codec": JsonRequestCodec(),
            "clock": staticmethod(clock),
        },
    )
    server = ThreadingHTTPServer((config.host, config.port), handler)
    server.daemon_threads = True
    return server


def create_channel_server(
    config: ServerConfig = ServerConfig(),
    clock: Callable[[], float] = time.time,
) -> socketserver.ThreadingTCPServer:
    """Create the raw one-shot channel server.

    Returns:
        ThreadingTCPServer ready to serve_forever().
    """
    handler = type(
        "BoundExoplanetChannelHandler",
        (ExoplanetChannelHandler,),
        {
            "config": config,
            "codec": JsonRequestCodec(),
            "clock": staticmethod(clock),
        },
    )
    return _ChannelServer((config.host, config.port), handler)


def create_server(
    config: ServerConfig = ServerConfig(),
    clock: Callable[[], float] = time.time,
) -> socketserver.TCPServer:
    """HTTP or raw channel server, as selected by config.raw."""
    if config.raw:
        return create_channel_server(config, clock)
    return create_exoplanet_server(config, clock)

