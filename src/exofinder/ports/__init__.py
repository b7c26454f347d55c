# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for request decoding and point-cloud export.

Adapters implement these to handle wire formats and files.
"""
from typing import Any, Protocol, runtime_checkable

from exofinder.domain.exoplanet import Exoplanet


@runtime_checkable
class ExoplanetRequestCodec(Protocol):
    """Port for turning wire payloads into requests and responses back."""

    def decode_request(self, payload: bytes) -> dict[str, Any]:
        """Decode a request payload. Raises ValueError if malformed."""
        ...

    def encode_response(self, response: dict[str, Any]) -> bytes:
        """Encode a response object for the wire."""
        ...


@runtime_checkable
class PointCloudExporter(Protocol):
    """Port for exporting located exoplanets as a point cloud file."""

    def export(self, exoplanets: list[Exoplanet], path: str) -> int:
        """
        Write the point cloud for a batch of located exoplanets.

        Args:
            exoplanets: Records with distance and galactic coordinates set.
            path: Output file path.

        Returns:
            Number of bytes written.
        """
        ...
