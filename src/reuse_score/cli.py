"""Command-line entry point: score every URL in a file and print NDJSON."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from reuse_score import __version__
from reuse_score.batch import format_record, iter_scored, load_urls
from reuse_score.config import ScorerConfig
from reuse_score.context import open_context
from reuse_score.errors import ConfigError

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = "reuse_score"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: ScorerConfig) -> logging.Handler:
    """Attach a single handler to the package logger per LOG_FILE / LOG_LEVEL.

    Logs go to LOG_FILE when set, otherwise to stderr; stdout carries only
    the NDJSON output.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if config.log_file:
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(config.log_level)
    return handler


async def _score_file(urls: Sequence[str], config: ScorerConfig) -> int:
    """Print each record as soon as it is scored so a later abort keeps earlier output."""
    emitted = 0
    async with open_context(config) as ctx:
        async for record in iter_scored(urls, ctx):
            print(format_record(record), flush=True)
            emitted += 1
    return emitted


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reuse-score",
        description="Score GitHub repositories and npm packages for reuse-worthiness.",
    )
    parser.add_argument(
        "url_file",
        type=Path,
        help="File with one GitHub or npm URL per line.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def run_cli(argv: list[str] | None = None) -> int:
    """CLI runner. Returns 0 when the whole batch was scored, 1 otherwise."""
    args = _parse_args(argv)
    # Values already in the environment win over the .env file.
    load_dotenv(find_dotenv(usecwd=True))
    try:
        config = ScorerConfig.from_env()
        configure_logging(config)
    except (ConfigError, OSError) as exc:
        print(f"reuse-score: {exc}", file=sys.stderr)
        return 1

    try:
        urls = load_urls(args.url_file)
        logger.info("Scoring %d URL(s) from %s", len(urls), args.url_file)
        emitted = asyncio.run(_score_file(urls, config))
    except Exception as exc:
        logger.exception("Batch failed")
        print(f"reuse-score: {exc}", file=sys.stderr)
        return 1

    logger.info("Wrote %d record(s)", emitted)
    return 0


if __name__ == "__main__":
    raise SystemExit(run_cli())
