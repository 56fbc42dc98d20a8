"""Append-only store of raw character payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ffxiv_tracker.storage.connection import get_connection
from ffxiv_tracker.storage.models import CharacterSnapshot


class SnapshotStore:
    """CRUD interface for the character_snapshots table."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    def create(
        self, character_id: str, data: Any, source: str = "lodestone"
    ) -> CharacterSnapshot:
        snapshot = CharacterSnapshot(
            character_id=character_id,
            data_json=json.dumps(data),
            source=source,
        )
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO character_snapshots
                    (id, character_id, snapshot_at, data_json, source)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    snapshot.id,
                    snapshot.character_id,
                    snapshot.snapshot_at,
                    snapshot.data_json,
                    snapshot.source,
                ),
            )
        return snapshot

    def get_latest(self, character_id: str) -> Optional[CharacterSnapshot]:
        # rowid breaks ties between snapshots taken in the same instant
        row = self._conn.execute(
            """
            SELECT * FROM character_snapshots
            WHERE character_id = ?
            ORDER BY snapshot_at DESC, rowid DESC LIMIT 1
            """,
            (character_id,),
        ).fetchone()
        if row is None:
            return None
        return CharacterSnapshot(
            id=row["id"],
            character_id=row["character_id"],
            snapshot_at=row["snapshot_at"],
            data_json=row["data_json"],
            source=row["source"],
        )

    def get_payload(self, snapshot: CharacterSnapshot) -> Any:
        """Decode the JSON payload of a snapshot."""
        return json.loads(snapshot.data_json)
