"""Command-line entry for crbmnl."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional

from . import run_server
from .exceptions import ConfigError


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the crbmnl CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="crbmnl",
        description="crbmnl - calendar and temperature status image server for e-ink displays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m crbmnl                          # Serve using ./crbmnl.yaml on port 8080
  python -m crbmnl --config /etc/crbmnl.yaml
  python -m crbmnl --port 3000 --debug
        """,
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to the YAML config file (default: ./crbmnl.yaml, or CRBMNL_CONFIG env var)",
    )
    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Address to bind the web server to (overrides server_bind)",
    )
    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port number for the web server (overrides server_port)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for crbmnl modules",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the crbmnl CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        run_server(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(0)


if __name__ == "__main__":
    main()
