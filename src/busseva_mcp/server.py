import argparse
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from busseva_mcp.app import mcp
from busseva_mcp.tools import route_tools, search_tools  # noqa: F401 - registers tools


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the BusSeva MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from busseva_mcp import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


def run_check(routes_file: Path) -> None:
    """Validate a routes JSON file and print a summary."""
    from busseva_mcp.data.corpus import load_routes_file
    from busseva_mcp.matching.stop_matcher import StopMatcher

    routes = load_routes_file(routes_file)
    stops = StopMatcher().distinct_stops(routes)
    empty = sum(1 for route in routes if not route.stops)

    print("\nRoutes file OK. Counts:")
    print(f"  routes: {len(routes):,}")
    print(f"  distinct stops: {len(stops):,}")
    if empty:
        print(f"  routes without stops: {empty:,}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="busseva-mcp",
        description="BusSeva bus directory MCP Server",
    )
    subparsers = parser.add_subparsers(dest="command")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a routes JSON file",
    )
    check_parser.add_argument(
        "routes_file",
        type=Path,
        nargs="?",
        default=(
            Path(os.environ["BUSSEVA_ROUTES_FILE"])
            if os.environ.get("BUSSEVA_ROUTES_FILE")
            else None
        ),
        help="Path to routes JSON file (default: BUSSEVA_ROUTES_FILE env var)",
    )
    check_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.command == "check":
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        if args.routes_file is None:
            parser.error("routes_file is required when BUSSEVA_ROUTES_FILE is not set")
        run_check(args.routes_file)
    else:
        # Default: run MCP server
        mcp.run()


if __name__ == "__main__":
    main()
