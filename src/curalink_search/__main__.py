"""
Curalink Search - command line entry point

Runs one unified search against the configured REST backend and prints the
ranked result as JSON.

Usage:
    python -m curalink_search "immunotherapy" --condition Glioblastoma --location Boston

    # With coordinates for distance labels
    python -m curalink_search "phase 2" --lat 42.36 --lon -71.06

Environment Variables:
    CURALINK_API_BASE_URL: REST backend root (default: http://localhost:8080/api/v1)
    CURALINK_TIMEOUT: HTTP timeout in seconds (default: 10)
    CURALINK_DISCUSSIONS_PATH: JSON discussion store (default: built-in threads)
    CURALINK_SCORING_CONFIG: YAML weight tables (default: built-in weights)
    CURALINK_FAILURE_POLICY: all_or_nothing | partial
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from curalink_search.container import create_container
from curalink_search.domain.entities import QueryContext
from curalink_search.shared.exceptions import CuralinkSearchError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="curalink-search",
        description="Rank experts, clinical trials and discussions for a query",
    )
    parser.add_argument("query", nargs="?", default="", help="Free-text search query")
    parser.add_argument("--condition", help="Profile condition appended to the query")
    parser.add_argument("--location", help="Profile location (city or free text)")
    parser.add_argument("--city", help="City used for proximity ranking")
    parser.add_argument("--country", help="Country used for proximity ranking")
    parser.add_argument("--lat", type=float, help="Latitude for distance ranking")
    parser.add_argument("--lon", type=float, help="Longitude for distance ranking")
    parser.add_argument("--api-base-url", help="REST backend root URL")
    parser.add_argument("--discussions", help="Path to a JSON discussion store")
    parser.add_argument("--scoring-config", help="Path to a YAML weight table file")
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Return sections that succeeded when a provider fails",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _report(error: CuralinkSearchError) -> int:
    logger.error(f"Search failed: {error}")
    print(json.dumps(error.to_dict(), indent=2))
    return 1


async def run(args: argparse.Namespace) -> int:
    overrides = {
        "api_base_url": args.api_base_url,
        "discussions_path": args.discussions,
        "scoring_config_path": args.scoring_config,
        "failure_policy": "partial" if args.partial else None,
    }
    context = QueryContext(
        raw_query=args.query,
        condition=args.condition,
        location=args.location,
        city=args.city,
        country=args.country,
        latitude=args.lat,
        longitude=args.lon,
    )

    try:
        container = create_container(overrides)
    except CuralinkSearchError as e:
        return _report(e)

    try:
        engine = container.engine()
        result = await engine.search(args.query, context)
    except CuralinkSearchError as e:
        return _report(e)
    finally:
        await container.expert_provider().close()
        await container.trial_provider().close()

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
