"""
Row models for the tracker's SQLite tables.

Plain dataclasses, one per table, used as the transport format between
storage and the rest of the package. Every field maps 1:1 to a column.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utc_now_iso() -> str:
    """ISO 8601 timestamp in UTC."""
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Character:
    """A tracked player character, unique per (name, server)."""

    name: str
    server: str
    lodestone_id: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    is_active: bool = True


@dataclass
class JobRecord:
    """An entry in the job catalogue."""

    name: str
    # "Tank", "Healer", "Melee DPS", ... or "Unknown"
    category: str
    max_level: int = 90
    icon: Optional[str] = None
    id: str = field(default_factory=new_id)


@dataclass
class AchievementRecord:
    """An entry in the achievement catalogue, keyed by its in-game id."""

    game_id: int
    name: str
    description: str
    category: str
    points: int = 0
    icon: Optional[str] = None
    id: str = field(default_factory=new_id)


@dataclass
class CharacterJob:
    """Level and experience of one character on one job."""

    character_id: str
    job_id: str
    level: int = 1
    experience: int = 0
    last_updated: str = field(default_factory=utc_now_iso)
    id: str = field(default_factory=new_id)

    # Populated by joins; not a column
    job_name: Optional[str] = None


@dataclass
class CharacterAchievement:
    character_id: str
    achievement_id: str
    earned_at: str = field(default_factory=utc_now_iso)
    id: str = field(default_factory=new_id)


@dataclass
class CharacterSnapshot:
    """
    A raw character payload captured at a point in time.

    ``data_json`` holds the JSON-encoded payload exactly as fetched.
    """

    character_id: str
    data_json: str
    source: str = "lodestone"
    snapshot_at: str = field(default_factory=utc_now_iso)
    id: str = field(default_factory=new_id)
