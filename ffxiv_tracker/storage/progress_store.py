"""
Character progress: job levels, achievement catalogue and earned
achievements.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ffxiv_tracker.errors import TrackerError
from ffxiv_tracker.storage.connection import get_connection
from ffxiv_tracker.storage.models import (
    AchievementRecord,
    CharacterAchievement,
    CharacterJob,
    new_id,
    utc_now_iso,
)

logger = logging.getLogger(__name__)


class CharacterJobStore:
    """Per-character job level and experience."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    def upsert(self, character_id: str, job_id: str, level: int, experience: int) -> CharacterJob:
        """Insert or update the (character, job) row and return its current state."""
        now = utc_now_iso()
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO character_jobs
                    (id, character_id, job_id, level, experience, last_updated)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT (character_id, job_id) DO UPDATE SET
                    level = excluded.level,
                    experience = excluded.experience,
                    last_updated = excluded.last_updated
                """,
                (new_id(), character_id, job_id, level, experience, now),
            )
        row = self._conn.execute(
            """
            SELECT cj.*, j.name AS job_name FROM character_jobs cj
            JOIN jobs j ON j.id = cj.job_id
            WHERE cj.character_id = ? AND cj.job_id = ?
            """,
            (character_id, job_id),
        ).fetchone()
        return self._row_to_character_job(row)

    def get_for_character(self, character_id: str) -> list[CharacterJob]:
        rows = self._conn.execute(
            """
            SELECT cj.*, j.name AS job_name FROM character_jobs cj
            JOIN jobs j ON j.id = cj.job_id
            WHERE cj.character_id = ?
            ORDER BY cj.level DESC, j.name
            """,
            (character_id,),
        ).fetchall()
        return [self._row_to_character_job(r) for r in rows]

    def _row_to_character_job(self, row) -> CharacterJob:
        return CharacterJob(
            id=row["id"],
            character_id=row["character_id"],
            job_id=row["job_id"],
            level=row["level"],
            experience=row["experience"],
            last_updated=row["last_updated"],
            job_name=row["job_name"],
        )


class AchievementStore:
    """Achievement catalogue plus the achievements each character has earned."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    def _row_to_achievement(self, row) -> AchievementRecord:
        return AchievementRecord(
            id=row["id"],
            game_id=row["game_id"],
            name=row["name"],
            description=row["description"],
            category=row["category"],
            points=row["points"],
            icon=row["icon"],
        )

    # ----- Catalogue -----

    def upsert(self, achievement: AchievementRecord) -> AchievementRecord:
        """Insert or refresh an achievement by ``game_id``; returns the stored row."""
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO achievements
                    (id, game_id, name, description, category, points, icon)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (game_id) DO UPDATE SET
                    name = excluded.name,
                    description = excluded.description,
                    category = excluded.category,
                    points = excluded.points,
                    icon = excluded.icon
                """,
                (
                    achievement.id,
                    achievement.game_id,
                    achievement.name,
                    achievement.description,
                    achievement.category,
                    achievement.points,
                    achievement.icon,
                ),
            )
        stored = self.get_by_game_id(achievement.game_id)
        if stored is None:
            raise TrackerError(f"Achievement {achievement.game_id} missing after upsert")
        return stored

    def get_by_game_id(self, game_id: int) -> Optional[AchievementRecord]:
        row = self._conn.execute(
            "SELECT * FROM achievements WHERE game_id = ?", (game_id,)
        ).fetchone()
        return self._row_to_achievement(row) if row else None

    # ----- Earned achievements -----

    def award(self, character_id: str, achievement_id: str) -> bool:
        """Record that a character earned an achievement. False if already earned."""
        earned = CharacterAchievement(character_id=character_id, achievement_id=achievement_id)
        with self._conn:
            cursor = self._conn.execute(
                """
                INSERT OR IGNORE INTO character_achievements
                    (id, character_id, achievement_id, earned_at)
                VALUES (?, ?, ?, ?)
                """,
                (earned.id, earned.character_id, earned.achievement_id, earned.earned_at),
            )
        awarded = cursor.rowcount > 0
        if awarded:
            logger.info("Character %s earned achievement %s", character_id, achievement_id)
        return awarded

    def get_for_character(self, character_id: str) -> list[AchievementRecord]:
        rows = self._conn.execute(
            """
            SELECT a.* FROM character_achievements ca
            JOIN achievements a ON a.id = ca.achievement_id
            WHERE ca.character_id = ?
            ORDER BY ca.earned_at DESC
            """,
            (character_id,),
        ).fetchall()
        return [self._row_to_achievement(r) for r in rows]

    def total_points(self, character_id: str) -> int:
        row = self._conn.execute(
            """
            SELECT COALESCE(SUM(a.points), 0) AS pts FROM character_achievements ca
            JOIN achievements a ON a.id = ca.achievement_id
            WHERE ca.character_id = ?
            """,
            (character_id,),
        ).fetchone()
        return row["pts"]
