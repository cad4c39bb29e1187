"""Command-line interface for the price oracles."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .config import load_config
from .errors import PriceOracleError
from .logging_setup import configure_logging
from .services import PriceService
from .timestamps import to_epoch_seconds

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="price-oracle",
        description="Fetch exchange prices over Tor",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("list", help="List enabled oracles")

    price_parser = sub.add_parser("price", help="Fetch a new price from one oracle")
    price_parser.add_argument(
        "oracle",
        nargs="?",
        default=None,
        help="Oracle name (default: first enabled oracle)",
    )

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit status."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    service = PriceService(config)

    if args.command == "list":
        for name in service.oracle_names:
            print(name)
        return 0

    name = args.oracle or service.oracle_names[0]
    try:
        quote = await service.get_price(name)
    except KeyError as e:
        logger.error("%s", e.args[0])
        return 1
    except PriceOracleError as e:
        logger.error("Getting %s price failed: %s", name, e)
        return 1

    print(
        json.dumps(
            {
                "oracle": name,
                "timestamp": to_epoch_seconds(quote.timestamp),
                "price": quote.price,
            }
        )
    )
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
