"""
CRUD operations for the characters table.

Characters are unique per (name, server). Deactivating a character
keeps its history but hides it from list_active().
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ffxiv_tracker.storage.connection import get_connection
from ffxiv_tracker.storage.models import Character, utc_now_iso

logger = logging.getLogger(__name__)


class CharacterStore:
    """CRUD interface for the characters table."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    def _row_to_character(self, row) -> Character:
        return Character(
            id=row["id"],
            name=row["name"],
            server=row["server"],
            lodestone_id=row["lodestone_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            is_active=bool(row["is_active"]),
        )

    # ----- Write operations -----

    def create(self, name: str, server: str, lodestone_id: Optional[str] = None) -> Character:
        """
        Insert a new character.

        Raises:
            sqlite3.IntegrityError: if (name, server) already exists.
        """
        character = Character(name=name, server=server, lodestone_id=lodestone_id)
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO characters
                    (id, name, server, lodestone_id, created_at, updated_at, is_active)
                VALUES (?, ?, ?, ?, ?, ?, 1)
                """,
                (
                    character.id,
                    character.name,
                    character.server,
                    character.lodestone_id,
                    character.created_at,
                    character.updated_at,
                ),
            )
        logger.info("Created character %s @ %s (%s)", name, server, character.id)
        return character

    def get_or_create(
        self, name: str, server: str, lodestone_id: Optional[str] = None
    ) -> Character:
        existing = self.get_by_name_and_server(name, server)
        if existing is not None:
            return existing
        return self.create(name, server, lodestone_id)

    def deactivate(self, character_id: str) -> bool:
        """Mark a character inactive. Returns False if it does not exist."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE characters SET is_active = 0, updated_at = ? WHERE id = ?",
                (utc_now_iso(), character_id),
            )
        return cursor.rowcount > 0

    def touch(self, character_id: str) -> None:
        """Bump updated_at after progress changes."""
        with self._conn:
            self._conn.execute(
                "UPDATE characters SET updated_at = ? WHERE id = ?",
                (utc_now_iso(), character_id),
            )

    # ----- Read operations -----

    def get_by_id(self, character_id: str) -> Optional[Character]:
        row = self._conn.execute(
            "SELECT * FROM characters WHERE id = ?", (character_id,)
        ).fetchone()
        return self._row_to_character(row) if row else None

    def get_by_name_and_server(self, name: str, server: str) -> Optional[Character]:
        row = self._conn.execute(
            "SELECT * FROM characters WHERE name = ? AND server = ?", (name, server)
        ).fetchone()
        return self._row_to_character(row) if row else None

    def list_active(self, limit: int = 100, offset: int = 0) -> list[Character]:
        rows = self._conn.execute(
            "SELECT * FROM characters WHERE is_active = 1 ORDER BY name LIMIT ? OFFSET ?",
            (limit, offset),
        ).fetchall()
        return [self._row_to_character(r) for r in rows]

    def count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) AS cnt FROM characters").fetchone()
        return row["cnt"]
