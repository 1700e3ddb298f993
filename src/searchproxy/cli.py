"""CLI entry point for the SearchProxy server."""

from __future__ import annotations

import argparse
import logging
import os
import socket
import sys
from pathlib import Path


def main() -> None:
    """Main CLI entry point for the SearchProxy server."""
    parser = argparse.ArgumentParser(
        prog="searchproxy",
        description="SearchProxy — one search endpoint in front of several search providers",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Number of worker processes",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SearchProxy {_get_version()}",
    )

    args = parser.parse_args()

    log_level = (args.log_level or "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = _load_settings(args.config)

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.log_level:
        settings.observability.log_level = args.log_level

    _check_port(settings.server.host, settings.server.port)

    import uvicorn

    from searchproxy.api.app import CONFIG_FILE_ENV, LOG_LEVEL_ENV, create_app

    if args.reload or settings.server.workers > 1:
        # Workers build their own app from an import string; hand them the
        # config file and log level through the environment
        if args.config:
            os.environ[CONFIG_FILE_ENV] = str(Path(args.config).resolve())
        if args.log_level:
            os.environ[LOG_LEVEL_ENV] = args.log_level
        uvicorn.run(
            "searchproxy.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not args.reload else 1,
            reload=args.reload,
            log_level=log_level.lower(),
        )
    else:
        uvicorn.run(
            create_app(settings),
            host=settings.server.host,
            port=settings.server.port,
            log_level=log_level.lower(),
        )


def _load_settings(config: str | None):
    from searchproxy.config.settings import Settings

    if config is None:
        return Settings()
    config_path = Path(config)
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)
    return Settings.from_yaml(config_path)


def _check_port(host: str, port: int) -> None:
    """Exit with a readable message if the port is already taken."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host if host != "0.0.0.0" else "127.0.0.1", port))
    except OSError:
        print(f"\n{'=' * 60}", file=sys.stderr)
        print(f"  ERROR: Port {port} is already in use!", file=sys.stderr)
        print(f"  Run 'lsof -i :{port}' to find the process.", file=sys.stderr)
        print(f"{'=' * 60}\n", file=sys.stderr)
        sys.exit(1)
    finally:
        sock.close()


def _get_version() -> str:
    """Get the package version."""
    from searchproxy import __version__

    return __version__


if __name__ == "__main__":
    main()
