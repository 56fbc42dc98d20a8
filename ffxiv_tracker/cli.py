"""CLI entrypoint for database maintenance and quick API lookups."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from ffxiv_tracker.clients.ff14_client import create_ff14_api_client
from ffxiv_tracker.config.logging_config import setup_logging
from ffxiv_tracker.config.settings import get_settings
from ffxiv_tracker.errors import TrackerError
from ffxiv_tracker.services.tracker import TrackerService
from ffxiv_tracker.storage.schema import get_schema_version, initialize_database
from ffxiv_tracker.storage.seed import seed_database

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ffxiv-tracker", description="FFXIV character progression tracker."
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (defaults to data/db/ffxiv_tracker.db).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level name, e.g. DEBUG or WARNING (default: INFO).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables and indexes.")
    sub.add_parser("seed", help="Seed the job catalogue and a test character.")

    character = sub.add_parser("character", help="Show a tracked character's progress.")
    character.add_argument("--name", required=True, help="Character name.")
    character.add_argument("--server", required=True, help="Home world.")

    sub.add_parser("fetch-jobs", help="List jobs from the game data API.")
    return parser


def _cmd_init_db(db_path: Optional[Path]) -> int:
    initialize_database(db_path)
    print(f"schema_version={get_schema_version(db_path)}")
    return 0


def _cmd_seed(db_path: Optional[Path]) -> int:
    summary = seed_database(db_path)
    print(
        "jobs_inserted={jobs_inserted} characters_inserted={characters_inserted} "
        "character_jobs_inserted={character_jobs_inserted}".format(**summary)
    )
    return 0


def _cmd_character(db_path: Optional[Path], name: str, server: str) -> int:
    initialize_database(db_path)
    service = TrackerService(db_path)

    character = service.get_character_by_name_and_server(name, server)
    if character is None:
        print(f"No character named {name!r} on {server}")
        return 1

    profile = service.get_character(character.id)
    if profile is None:
        # Removed between the two lookups
        print(f"No character named {name!r} on {server}")
        return 1
    print(f"{character.name} @ {character.server} (lodestone={character.lodestone_id})")
    for cj in profile.jobs:
        print(f"  {cj.job_name:<16} lv{cj.level:>3}  exp={cj.experience}")
    for achievement in profile.achievements:
        print(f"  * {achievement.name} ({achievement.points} pts)")
    print(f"achievement_points={profile.achievement_points}")
    return 0


def _cmd_fetch_jobs() -> int:
    with create_ff14_api_client() as client:
        jobs = client.get_jobs()
    for job in jobs:
        print(f"{job.id:>4}  {job.name:<16} {job.category:<12} max={job.max_level}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tracker CLI and return a process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        setup_logging(log_dir=settings.logs_dir, level=args.log_level)

        if args.command == "init-db":
            return _cmd_init_db(args.db)
        if args.command == "seed":
            return _cmd_seed(args.db)
        if args.command == "character":
            return _cmd_character(args.db, args.name, args.server)
        if args.command == "fetch-jobs":
            return _cmd_fetch_jobs()
    except TrackerError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
