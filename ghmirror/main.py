"""Command-line entry point"""

import argparse
import logging
from typing import Any, Dict, List, Optional

from ghmirror.config import settings
from ghmirror.models.base import SCHEMA_MESSAGES, database_url_for, init_db, make_engine, session_scope
from ghmirror.scheduler import SyncScheduler
from ghmirror.services.github_client import GitHubClient
from ghmirror.services.stats import SyncStats
from ghmirror.services.sync_service import SyncService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghmirror",
        description="Mirror a GitHub repository's issues and comments into a SQLite database",
    )
    parser.add_argument("owner", help="Repository owner (user or organization)")
    parser.add_argument("repo", help="Repository name")
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="GitHub token (default: GITHUB_TOKEN from the environment or .env)",
    )
    parser.add_argument("db_name", nargs="?", default=None, help="SQLite file (default: <owner>-<repo>.db)")
    parser.add_argument(
        "--every-minutes",
        type=int,
        default=settings.sync_interval_minutes,
        help="Keep running and re-sync at this interval",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    args.token = args.token or settings.github_token
    if not args.token:
        parser.error("a GitHub token is required (argument or GITHUB_TOKEN)")
    if args.every_minutes is not None and args.every_minutes <= 0:
        parser.error("--every-minutes must be a positive number of minutes")

    args.db_name = args.db_name or f"{args.owner}-{args.repo}.db"
    return args


def run_sync(owner: str, repo: str, token: str, db_name: str) -> Dict[str, Any]:
    """Run one full sync and always emit the summary"""
    stats = SyncStats()
    engine = make_engine(database_url_for(db_name))
    try:
        state = init_db(engine)
        logger.info(SCHEMA_MESSAGES[state])

        client = GitHubClient(token)
        with session_scope(engine) as db:
            result = SyncService(db, client).sync_repository(owner, repo, stats=stats)
    except Exception as e:
        logger.error(f"Sync aborted for {owner}/{repo}: {e}")
        result = {"status": "failed", "error": str(e), "stats": stats}
    finally:
        # Session is closed by now; release the file only after the last commit.
        engine.dispose()
        stats.report()
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Using database: {args.db_name}")

    if args.every_minutes:
        SyncScheduler(
            lambda: run_sync(args.owner, args.repo, args.token, args.db_name)["status"],
            args.every_minutes,
        ).start()
        return 0

    run_sync(args.owner, args.repo, args.token, args.db_name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
