# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON request/response codec.

Decodes request payloads into plain dicts and encodes responses as
compact JSON. External dependencies (json) are confined to this adapter.
"""
import json
from typing import Any

from exofinder.ports import ExoplanetRequestCodec


MAX_REQUEST_BYTES = 255


class RequestDecodeError(ValueError):
    """Raised when a request payload is not a JSON object."""


class JsonRequestCodec(ExoplanetRequestCodec):
    """UTF-8 JSON codec for exoplanet requests and responses."""

    def decode_request(self, payload: bytes) -> dict[str, Any]:
        # The raw channel host terminates the payload with a NUL.
        text_bytes = payload.split(b"\x00", 1)[0]
        try:
            text = text_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RequestDecodeError(f"Request is not valid UTF-8: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RequestDecodeError(f"Error parsing JSON: {e}") from e
        if not isinstance(data, dict):
            raise RequestDecodeError(
                f"Request must be a JSON object, got {type(data).__name__}"
            )
        return data

    def encode_response(self, response: dict[str, Any]) -> bytes:
        return json.dumps(
            response, separators=(",", ":"), allow_nan=False,
        ).encode("utf-8")


def read_requests(path: str) -> list[dict[str, Any]]:
    """
    Read a JSON file holding one request object or an array of them.

    Raises:
        RequestDecodeError: If the file is not JSON or holds anything
            other than objects.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RequestDecodeError(f"Error parsing JSON in {path}: {e}") from e

    requests = data if isinstance(data, list) else [data]
    for index, request in enumerate(requests):
        if not isinstance(request, dict):
            raise RequestDecodeError(
                f"Entry {index} in {path} is not a JSON object"
            )
    return requests
