"""Command line entry point: language byte counts across an account's repositories."""

import argparse
import logging
import math
import sys
from typing import List, Optional

from rich.console import Console

from gh_langs.application.language_stats_service import LanguageStatsService
from gh_langs.config import Settings
from gh_langs.domain.errors import GhLangsError
from gh_langs.infrastructure.github_client import GitHubRESTClient
from gh_langs.infrastructure.table_renderer import render_report

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _years(value: str) -> float:
    try:
        years = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of years: {value!r}")
    if not math.isfinite(years):
        raise argparse.ArgumentTypeError(f"years must be a finite number, got {value!r}")
    if years < 0:
        raise argparse.ArgumentTypeError("years must not be negative")
    return years


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-langs",
        description="Sum the language byte counts of every repository owned by a GitHub user or organization.",
    )
    parser.add_argument("account", nargs="?", default=None, help="GitHub user or organization (default: the current gh user)")
    parser.add_argument("-y", "--years", type=_years, default=1.0, help="Only count repositories updated within this many years; 0 counts all (default: 1)")
    parser.add_argument("-j", "--jobs", type=_positive_int, default=None, help="Maximum concurrent language requests (default: GH_LANGS_MAX_WORKERS or 8)")
    parser.add_argument("--strict", action="store_true", help="Fail if the languages of any repository cannot be fetched")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for debug output)")
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the tool and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    error_console = Console(stderr=True)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        error_console.print(f"Error: {e}", style="bold red", highlight=False, markup=False, soft_wrap=True)
        return 1

    if not settings.token:
        logger.info("GITHUB_TOKEN not set. Using unauthenticated requests (limited rate).")

    max_workers = args.jobs or settings.max_workers
    target = args.account or "the current user"

    try:
        with GitHubRESTClient(token=settings.token, api_url=settings.api_url, timeout=settings.timeout) as client:
            service = LanguageStatsService(client, max_workers=max_workers, strict=args.strict)
            with error_console.status(f"Fetching repositories of {target}..."):
                report = service.collect(args.account, years=args.years)
    except GhLangsError as e:
        logger.error(f"Language stats for {target} failed: {e}")
        error_console.print(f"Error: {e}", style="bold red", highlight=False, markup=False, soft_wrap=True)
        return 1
    except KeyboardInterrupt:
        error_console.print("\nOperation cancelled by user")
        return 130

    render_report(report, error_console=error_console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
