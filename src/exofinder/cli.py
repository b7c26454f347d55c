# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for exoplanet location.

Usage:
    # Locate one exoplanet (request JSON from a file or stdin)
    exofinder --locate request.json
    echo '{"eccentricity": 0.1, "unix_time": 1700000000}' | exofinder --locate -

    # Locate a batch and export an OBJ point cloud
    exofinder --batch planets.json --export-obj planets.obj
    exofinder --batch planets.json --export-obj planets.obj --points --width 800 --height 600

    # Run the service (HTTP JSON API, or the raw one-shot channel)
    exofinder --serve --port 2222
    exofinder --serve --raw --port 2222
"""
import argparse
import json
import logging
import signal
import sys

from exofinder.adapters.json_codec import (
    JsonRequestCodec,
    RequestDecodeError,
    read_requests,
)
from exofinder.adapters.obj_exporter import ObjPointCloudExporter
from exofinder.adapters.exoplanet_server import ServerConfig, create_server
from exofinder.domain.exoplanet import Exoplanet, exoplanet_from_request
from exofinder.domain.pipeline import handle_request, locate_exoplanet
from exofinder.version import __version__


logger = logging.getLogger(__name__)


def run_locate(source: str) -> dict:
    """
    Locate the exoplanet described by a request file ('-' for stdin).

    Returns:
        Response object, as the service would send it.
    """
    if source == "-":
        request = JsonRequestCodec().decode_request(sys.stdin.buffer.read())
    else:
        requests = read_requests(source)
        if len(requests) != 1:
            raise RequestDecodeError(
                f"{source} holds {len(requests)} requests; use --batch for arrays"
            )
        request = requests[0]
    return handle_request(request)


def run_batch(
    input_path: str,
    output_path: str,
    width: float = 1920.0,
    height: float = 1080.0,
    element: str = "v",
) -> tuple[int, list[Exoplanet]]:
    """
    Locate every request in a JSON file and write an OBJ point cloud.

    Returns:
        (byte_count, exoplanets): bytes written and the located records.
    """
    requests = read_requests(input_path)
    planets = [locate_exoplanet(exoplanet_from_request(r)) for r in requests]
    exporter = ObjPointCloudExporter(
        screen_width=width, screen_height=height, element=element,
    )
    size = exporter.export(planets, output_path)
    return size, planets


def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


def _run_serve(config: ServerConfig) -> None:
    """Start the location service and block until interrupted."""
    try:
        server = create_server(config)
    except OSError as e:
        if "Address already in use" in str(e) or e.errno == 98:
            print(
                f"Error: Port {config.port} is already in use.\n"
                f"Try a different port: exofinder --serve --port {config.port + 1}",
                file=sys.stderr,
            )
            sys.exit(1)
        raise

    signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)
    kind = "raw channel" if config.raw else "HTTP"
    logger.info("Serving %s on %s:%d", kind, config.host, config.port)
    print(f"Listening on port {config.port} ({kind})...")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        server.server_close()
        logger.info("Server closed")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Locate exoplanets on the sky from their orbital elements"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )
    parser.add_argument(
        '--version', action='version', version=f"%(prog)s {__version__}"
    )

    serve_group = parser.add_argument_group('service')
    serve_group.add_argument(
        '--serve', action='store_true', default=False,
        help="Start the location service"
    )
    serve_group.add_argument(
        '--host', default="0.0.0.0",
        help="Address to bind (default: 0.0.0.0)"
    )
    serve_group.add_argument(
        '--port', type=int, default=2222,
        help="Port to listen on (default: 2222)"
    )
    serve_group.add_argument(
        '--raw', action='store_true', default=False,
        help="Serve the raw one-shot JSON channel instead of HTTP"
    )

    locate_group = parser.add_argument_group('locate')
    locate_group.add_argument(
        '--locate', metavar='FILE',
        help="Locate one exoplanet from a request JSON file ('-' for stdin)"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument(
        '--batch', metavar='FILE',
        help="JSON array of exoplanet requests to locate"
    )
    export_group.add_argument(
        '--export-obj', metavar='FILE',
        help="Write the located batch as a Wavefront OBJ point cloud"
    )
    export_group.add_argument(
        '--width', type=float, default=1920.0,
        help="Screen width for OBJ scaling (default: 1920)"
    )
    export_group.add_argument(
        '--height', type=float, default=1080.0,
        help="Screen height for OBJ scaling (default: 1080)"
    )
    export_group.add_argument(
        '--points', action='store_true', default=False,
        help="Emit OBJ point ('p') lines instead of vertex ('v') lines"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        _run_serve(ServerConfig(host=args.host, port=args.port, raw=args.raw))
        return

    if not args.locate and not args.batch:
        parser.error("one of --serve, --locate or --batch is required")
    if args.batch and not args.export_obj:
        parser.error("--batch requires --export-obj")

    try:
        if args.locate:
            response = run_locate(args.locate)
            print(json.dumps(response, indent=2))

        if args.batch:
            size, planets = run_batch(
                input_path=args.batch,
                output_path=args.export_obj,
                width=args.width,
                height=args.height,
                element="p" if args.points else "v",
            )
            print(f"Exported {len(planets)} exoplanets to {args.export_obj} ({size} bytes)")

    except FileNotFoundError as e:
        print(f"Error: Input file not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
