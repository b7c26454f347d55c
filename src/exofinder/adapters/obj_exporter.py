# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Wavefront OBJ point-cloud exporter.

Writes located exoplanets as OBJ vertex or point lines, scaled to a
screen. External dependencies (file I/O) are confined to this adapter.
"""
import logging

from exofinder.domain.exoplanet import Exoplanet
from exofinder.domain.visualization import OBJ_ELEMENTS, generate_obj_data
from exofinder.ports import PointCloudExporter

logger = logging.getLogger(__name__)


class ObjPointCloudExporter(PointCloudExporter):
    """Exports exoplanets to a Wavefront OBJ file.

    Args:
        screen_width: Target width in output units.
        screen_height: Target height in output units.
        element: "v" (vertices) or "p" (points).
    """

    def __init__(
        self,
        screen_width: float = 1920.0,
        screen_height: float = 1080.0,
        element: str = "v",
    ) -> None:
        if element not in OBJ_ELEMENTS:
            raise ValueError(f"element must be one of {OBJ_ELEMENTS}, got {element!r}")
        self._width = screen_width
        self._height = screen_height
        self._element = element

    def export(self, exoplanets: list[Exoplanet], path: str) -> int:
        unsolved = sum(1 for p in exoplanets if not p.solved)
        if unsolved:
            logger.warning(
                "%d of %d exoplanets have no solved position; writing NaN points",
                unsolved, len(exoplanets),
            )

        text, size = generate_obj_data(
            exoplanets, self._width, self._height, element=self._element,
        )
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        logger.info("Wrote %d points (%d bytes) to %s", len(exoplanets), size, path)
        return size
