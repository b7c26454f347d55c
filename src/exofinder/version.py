# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Installed version of exofinder, read from package metadata."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("exofinder")
except PackageNotFoundError:
    # Running from a source tree that was never installed
    __version__ = "0.0.0"
