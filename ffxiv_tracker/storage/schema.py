"""
SQLite schema definitions (DDL).

Tables:
    characters              tracked player characters
    jobs                    job catalogue (Paladin, White Mage, ...)
    achievements            achievement catalogue keyed by game id
    character_jobs          per-character job level/experience
    character_achievements  achievements earned by a character
    character_snapshots     raw profile payloads captured over time
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ffxiv_tracker.storage.connection import get_connection

logger = logging.getLogger(__name__)

# Bump when adding migrations.
SCHEMA_VERSION = 1

_CHARACTERS_DDL = """
CREATE TABLE IF NOT EXISTS characters (
    id              TEXT PRIMARY KEY,
    name            TEXT NOT NULL,
    server          TEXT NOT NULL,
    lodestone_id    TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL,
    is_active       INTEGER NOT NULL DEFAULT 1,
    UNIQUE (name, server)
);
"""

_JOBS_DDL = """
CREATE TABLE IF NOT EXISTS jobs (
    id          TEXT PRIMARY KEY,
    name        TEXT UNIQUE NOT NULL,
    category    TEXT NOT NULL,
    max_level   INTEGER NOT NULL DEFAULT 90,
    icon        TEXT
);
"""

_ACHIEVEMENTS_DDL = """
CREATE TABLE IF NOT EXISTS achievements (
    id          TEXT PRIMARY KEY,
    game_id     INTEGER UNIQUE NOT NULL,
    name        TEXT NOT NULL,
    description TEXT NOT NULL,
    category    TEXT NOT NULL,
    points      INTEGER NOT NULL DEFAULT 0,
    icon        TEXT
);
"""

_CHARACTER_JOBS_DDL = """
CREATE TABLE IF NOT EXISTS character_jobs (
    id              TEXT PRIMARY KEY,
    character_id    TEXT NOT NULL,
    job_id          TEXT NOT NULL,
    level           INTEGER NOT NULL DEFAULT 1,
    experience      INTEGER NOT NULL DEFAULT 0,
    last_updated    TEXT NOT NULL,
    UNIQUE (character_id, job_id),
    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE,
    FOREIGN KEY (job_id) REFERENCES jobs(id) ON DELETE RESTRICT
);
"""

_CHARACTER_ACHIEVEMENTS_DDL = """
CREATE TABLE IF NOT EXISTS character_achievements (
    id              TEXT PRIMARY KEY,
    character_id    TEXT NOT NULL,
    achievement_id  TEXT NOT NULL,
    earned_at       TEXT NOT NULL,
    UNIQUE (character_id, achievement_id),
    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE,
    FOREIGN KEY (achievement_id) REFERENCES achievements(id) ON DELETE RESTRICT
);
"""

_CHARACTER_SNAPSHOTS_DDL = """
CREATE TABLE IF NOT EXISTS character_snapshots (
    id              TEXT PRIMARY KEY,
    character_id    TEXT NOT NULL,
    snapshot_at     TEXT NOT NULL,
    data_json       TEXT NOT NULL,
    source          TEXT NOT NULL DEFAULT 'lodestone',
    FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE
);
"""

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_character_jobs_character ON character_jobs(character_id);",
    "CREATE INDEX IF NOT EXISTS idx_character_achievements_character ON character_achievements(character_id);",
    "CREATE INDEX IF NOT EXISTS idx_character_snapshots_latest ON character_snapshots(character_id, snapshot_at);",
]


def initialize_database(db_path: Optional[Path] = None) -> None:
    """
    Create all tables and indexes if they don't exist.

    Safe to call multiple times; all statements use IF NOT EXISTS.
    """
    conn = get_connection(db_path)

    logger.info("Initializing database schema (version %d)...", SCHEMA_VERSION)

    with conn:
        for ddl in (
            _CHARACTERS_DDL,
            _JOBS_DDL,
            _ACHIEVEMENTS_DDL,
            _CHARACTER_JOBS_DDL,
            _CHARACTER_ACHIEVEMENTS_DDL,
            _CHARACTER_SNAPSHOTS_DDL,
        ):
            conn.execute(ddl)
        for idx_sql in _INDEXES:
            conn.execute(idx_sql)
        conn.execute(f"PRAGMA user_version={SCHEMA_VERSION}")


def get_schema_version(db_path: Optional[Path] = None) -> int:
    """Return the current schema version of the database."""
    conn = get_connection(db_path)
    row = conn.execute("PRAGMA user_version").fetchone()
    return row[0] if row else 0
