from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from src.search.pipeline import SearchPipeline
from src.utils.env import load_env
from src.web.config import SearchConfig, SessionConfig, resolve_executable_path
from src.web.errors import ConfigError, SearchBotError
from src.web.factory import BrowserSessionFactory

LOG_DIR = Path("logs")

logger = logging.getLogger(__name__)


class QueryFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "query"):
            record.query = "-"
        return True


def configure_logging(log_dir: Path, debug: bool) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        log_dir / "search.log",
        when="midnight",
        interval=1,
        backupCount=14,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(query)s %(levelname)s %(name)s %(message)s")
    )
    handler.addFilter(QueryFilter())
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run one search in a headless browser and print the result links."
    )
    parser.add_argument("query", nargs="?", default="test", help="Search query.")
    parser.add_argument("--base-url", help="Search engine start page.")
    parser.add_argument(
        "--deadline",
        type=float,
        help="Seconds allowed for the whole run (launch to extraction).",
    )
    parser.add_argument("--chrome-path", help="Chrome/Chromium executable to launch.")
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window.",
    )
    parser.add_argument(
        "--min-results",
        type=int,
        help="Result headings to wait for before extracting (0 disables the wait).",
    )
    parser.add_argument(
        "--settle-delay",
        type=float,
        help="Extra fixed wait in seconds after the results appear.",
    )
    parser.add_argument("--log-dir", type=Path, default=LOG_DIR)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def apply_overrides(
    args: argparse.Namespace,
    session_config: SessionConfig,
    search_config: SearchConfig,
) -> tuple[SessionConfig, SearchConfig]:
    session_changes = {}
    if args.chrome_path:
        session_changes["executable_path"] = resolve_executable_path(args.chrome_path)
    if args.headed:
        session_changes["headless"] = False
    if args.deadline is not None:
        session_changes["deadline_seconds"] = args.deadline
    search_changes = {}
    if args.base_url:
        search_changes["base_url"] = args.base_url
    if args.min_results is not None:
        search_changes["min_results"] = args.min_results
    if args.settle_delay is not None:
        search_changes["settle_delay_seconds"] = args.settle_delay
    return (
        dataclasses.replace(session_config, **session_changes),
        dataclasses.replace(search_config, **search_changes),
    )


def load_configs(args: argparse.Namespace) -> tuple[SessionConfig, SearchConfig]:
    try:
        return apply_overrides(args, SessionConfig.from_env(), SearchConfig.from_env())
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_env()
    configure_logging(args.log_dir, args.debug)

    try:
        session_config, search_config = load_configs(args)
        pipeline = SearchPipeline(
            BrowserSessionFactory(session_config),
            deadline_seconds=session_config.deadline_seconds,
            search_config=search_config,
        )
        pipeline.run(args.query)
    except SearchBotError as exc:
        logger.exception("Run failed", extra={"query": args.query})
        print(f"error: {exc.stage} failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
