"""Character progression service on top of the SQLite stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ffxiv_tracker.storage.character_store import CharacterStore
from ffxiv_tracker.storage.job_store import JobStore
from ffxiv_tracker.storage.models import (
    AchievementRecord,
    Character,
    CharacterJob,
    CharacterSnapshot,
)
from ffxiv_tracker.storage.progress_store import AchievementStore, CharacterJobStore
from ffxiv_tracker.storage.seed import JOB_CATALOGUE
from ffxiv_tracker.storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"

_CATEGORY_BY_JOB = {name: category for name, category, _ in JOB_CATALOGUE}


def determine_job_category(job_name: str) -> str:
    """Map a job name to its role category, or "Unknown"."""
    return _CATEGORY_BY_JOB.get(job_name, UNKNOWN_CATEGORY)


@dataclass
class CharacterProfile:
    """A character with its job levels and earned achievements."""

    character: Character
    jobs: list[CharacterJob] = field(default_factory=list)
    achievements: list[AchievementRecord] = field(default_factory=list)
    achievement_points: int = 0


class TrackerService:
    """Coordinates characters, job progress and snapshots."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        character_store: Optional[CharacterStore] = None,
        job_store: Optional[JobStore] = None,
        character_job_store: Optional[CharacterJobStore] = None,
        achievement_store: Optional[AchievementStore] = None,
        snapshot_store: Optional[SnapshotStore] = None,
    ) -> None:
        self._characters = character_store or CharacterStore(db_path)
        self._jobs = job_store or JobStore(db_path)
        self._character_jobs = character_job_store or CharacterJobStore(db_path)
        self._achievements = achievement_store or AchievementStore(db_path)
        self._snapshots = snapshot_store or SnapshotStore(db_path)

    # ----- Characters -----

    def create_character(
        self, name: str, server: str, lodestone_id: Optional[str] = None
    ) -> Character:
        return self._characters.create(name, server, lodestone_id)

    def get_character(self, character_id: str) -> Optional[CharacterProfile]:
        character = self._characters.get_by_id(character_id)
        if character is None:
            return None
        return CharacterProfile(
            character=character,
            jobs=self._character_jobs.get_for_character(character_id),
            achievements=self._achievements.get_for_character(character_id),
            achievement_points=self._achievements.total_points(character_id),
        )

    def get_character_by_name_and_server(self, name: str, server: str) -> Optional[Character]:
        return self._characters.get_by_name_and_server(name, server)

    # ----- Progress -----

    def update_character_job(
        self, character_id: str, job_name: str, level: int, experience: int
    ) -> CharacterJob:
        """
        Record a character's level on a job.

        The job is created on first sight with a category derived from
        its name. Re-recording the same job overwrites level and
        experience.
        """
        job = self._jobs.get_or_create(job_name, determine_job_category(job_name))
        character_job = self._character_jobs.upsert(character_id, job.id, level, experience)
        self._characters.touch(character_id)
        logger.debug(
            "Character %s now %s level %d (%d exp)", character_id, job_name, level, experience
        )
        return character_job

    # ----- Snapshots -----

    def create_snapshot(
        self, character_id: str, data: Any, source: str = "lodestone"
    ) -> CharacterSnapshot:
        return self._snapshots.create(character_id, data, source)

    def get_latest_snapshot(self, character_id: str) -> Optional[CharacterSnapshot]:
        return self._snapshots.get_latest(character_id)
