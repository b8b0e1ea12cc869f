"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import sys

from masterstats import __version__
from masterstats.config import settings
from masterstats.core.logging import bootstrap_logging, shutdown_logging
from masterstats.domain.enums import Region

_BRIGHT_GREEN = "\033[1;92m"
_CYAN = "\033[96m"
_RESET = "\033[0m"


def _print_banner() -> None:
    div = "═" * 48
    print(f"{_BRIGHT_GREEN}{div}{_RESET}")
    print(f"{_CYAN}  MasterStats {__version__} - Champion Mastery Statistics{_RESET}")
    print(f"{_BRIGHT_GREEN}{div}{_RESET}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="masterstats", description="Champion mastery statistics")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="root log level (default: %(default)s)")
    parser.add_argument("--no-banner", action="store_true", help="do not print the banner")
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="look up summoners and print their statistics")
    lookup.add_argument("region", type=str.upper, choices=[r.name for r in Region.all_regions()])
    lookup.add_argument("names", nargs="+", metavar="NAME")
    return parser


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    bootstrap_logging(level=args.log_level, log_dir=settings.LOG_DIR)
    try:
        if not args.no_banner:
            _print_banner()
        from masterstats.presentation.cli import LookupCommand

        if args.command == "lookup":
            failures = asyncio.run(LookupCommand().run(args.region, args.names))
            return 1 if failures else 0
        return 2
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    finally:
        shutdown_logging()


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
