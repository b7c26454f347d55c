# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for the wire format, point-cloud files and network hosts.

External dependencies (json, sockets, file I/O) are confined to this layer.
"""
from exofinder.adapters.json_codec import (
    MAX_REQUEST_BYTES,
    JsonRequestCodec,
    RequestDecodeError,
    read_requests,
)
from exofinder.adapters.obj_exporter import ObjPointCloudExporter
from exofinder.adapters.exoplanet_server import (
    ServerConfig,
    create_channel_server,
    create_exoplanet_server,
    create_server,
)
