"""
Shared test fixtures for the ffxiv_tracker test suite.

Every storage test gets a clean SQLite database in a temporary
directory with the schema already initialized. Rate limiter tests use
FakeClock so refill and eviction are driven explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from ffxiv_tracker.ratelimit.bucket import RateLimitConfig
from ffxiv_tracker.storage.character_store import CharacterStore
from ffxiv_tracker.storage.connection import close_connection, get_connection
from ffxiv_tracker.storage.job_store import JobStore
from ffxiv_tracker.storage.models import AchievementRecord
from ffxiv_tracker.storage.progress_store import AchievementStore, CharacterJobStore
from ffxiv_tracker.storage.schema import initialize_database
from ffxiv_tracker.storage.snapshot_store import SnapshotStore


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """
    Provide a temporary SQLite database path.

    Uses pytest's tmp_path fixture for automatic cleanup.
    """
    return tmp_path / "test_ffxiv_tracker.db"


@pytest.fixture
def db(db_path: Path):
    """
    Provide an initialized database connection.

    Creates all tables, yields the connection, then cleans up.
    """
    initialize_database(db_path)
    conn = get_connection(db_path)
    yield conn
    close_connection(db_path)


@pytest.fixture
def character_store(db, db_path: Path) -> CharacterStore:
    return CharacterStore(db_path)


@pytest.fixture
def job_store(db, db_path: Path) -> JobStore:
    return JobStore(db_path)


@pytest.fixture
def character_job_store(db, db_path: Path) -> CharacterJobStore:
    return CharacterJobStore(db_path)


@pytest.fixture
def achievement_store(db, db_path: Path) -> AchievementStore:
    return AchievementStore(db_path)


@pytest.fixture
def snapshot_store(db, db_path: Path) -> SnapshotStore:
    return SnapshotStore(db_path)


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------


def make_config(
    max_tokens: float = 10,
    refill_rate: float = 1,
    refill_interval_ms: float = 1000,
    **kwargs: Any,
) -> RateLimitConfig:
    """Create a RateLimitConfig with test-friendly defaults."""
    return RateLimitConfig(
        max_tokens=max_tokens,
        refill_rate=refill_rate,
        refill_interval_ms=refill_interval_ms,
        **kwargs,
    )


def make_achievement_record(
    game_id: int = 1001,
    name: str = "To Crush Your Enemies I",
    description: str = "Defeat 100 enemies.",
    category: str = "Battle",
    points: int = 5,
) -> AchievementRecord:
    return AchievementRecord(
        game_id=game_id,
        name=name,
        description=description,
        category=category,
        points=points,
    )


def make_job_payload(**overrides: Any) -> dict[str, Any]:
    """A valid camelCase job payload as the API returns it."""
    payload = {
        "id": 19,
        "name": "Paladin",
        "abbreviation": "PLD",
        "category": "Tank",
        "maxLevel": 90,
        "startingLevel": 30,
        "classJob": "Gladiator",
        "unlockQuest": "Paladin's Pledge",
        "jobStone": "Soul of the Paladin",
        "primaryAttribute": "Strength",
        "isStartingClass": False,
        "expansionRequired": None,
    }
    payload.update(overrides)
    return payload


def make_item_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": 35000,
        "name": "Augmented Radiant's Longsword",
        "description": "A sword of radiant make.",
        "category": "Weapon",
        "subCategory": "Gladiator's Arm",
        "itemLevel": 605,
        "requiredLevel": 90,
        "rarity": "Rare",
        "stackSize": 1,
        "vendorPrice": 0,
        "canBeHq": False,
        "tradeable": False,
        "desynthable": True,
        "dyeable": False,
        "stats": {"strength": 410.0, "vitality": 445.0},
        "jobs": ["Paladin"],
        "obtainedFrom": ["Tomestone exchange"],
    }
    payload.update(overrides)
    return payload


def make_achievement_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": 1001,
        "name": "To Crush Your Enemies I",
        "description": "Defeat 100 enemies.",
        "category": "Battle",
        "subCategory": "Battle",
        "points": 5,
        "title": None,
        "icon": "/i/006000/006001.png",
        "isSecret": False,
        "requirements": ["Defeat 100 enemies"],
        "rewards": [],
        "series": "To Crush Your Enemies",
        "order": 1,
    }
    payload.update(overrides)
    return payload


def make_quest_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": 65564,
        "name": "Coming to Gridania",
        "description": "Arrive in Gridania.",
        "type": "Main Scenario",
        "level": 1,
        "jobRequired": None,
        "levelRequired": 0,
        "expansionRequired": None,
        "prerequisites": [],
        "rewards": {"experience": 100, "gil": 50, "items": [], "unlocks": []},
        "objectives": ["Speak with Bertennant"],
        "location": "New Gridania",
        "npcGiver": "Bertennant",
        "isMainScenario": True,
        "isSideQuest": False,
        "isJobQuest": False,
        "isClassQuest": False,
        "isRepeatable": False,
    }
    payload.update(overrides)
    return payload
