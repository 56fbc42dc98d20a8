"""CRUD operations for the jobs catalogue table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ffxiv_tracker.storage.connection import get_connection
from ffxiv_tracker.storage.models import JobRecord

logger = logging.getLogger(__name__)


class JobStore:
    """CRUD interface for the jobs table."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    def _row_to_job(self, row) -> JobRecord:
        return JobRecord(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            max_level=row["max_level"],
            icon=row["icon"],
        )

    def create(self, name: str, category: str, max_level: int = 90) -> JobRecord:
        job = JobRecord(name=name, category=category, max_level=max_level)
        with self._conn:
            self._conn.execute(
                "INSERT INTO jobs (id, name, category, max_level, icon) VALUES (?, ?, ?, ?, ?)",
                (job.id, job.name, job.category, job.max_level, job.icon),
            )
        logger.debug("Created job %s (%s)", name, category)
        return job

    def insert_if_missing(self, name: str, category: str, max_level: int = 90) -> bool:
        """Insert a job unless one with this name exists. Returns True if inserted."""
        job = JobRecord(name=name, category=category, max_level=max_level)
        with self._conn:
            cursor = self._conn.execute(
                "INSERT OR IGNORE INTO jobs (id, name, category, max_level) VALUES (?, ?, ?, ?)",
                (job.id, job.name, job.category, job.max_level),
            )
        return cursor.rowcount > 0

    def get_or_create(self, name: str, category: str) -> JobRecord:
        """Return the job named ``name``, creating it with ``category`` if absent."""
        existing = self.get_by_name(name)
        if existing is not None:
            return existing
        return self.create(name, category)

    def get_by_id(self, job_id: str) -> Optional[JobRecord]:
        row = self._conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
        return self._row_to_job(row) if row else None

    def get_by_name(self, name: str) -> Optional[JobRecord]:
        row = self._conn.execute("SELECT * FROM jobs WHERE name = ?", (name,)).fetchone()
        return self._row_to_job(row) if row else None

    def list_all(self) -> list[JobRecord]:
        rows = self._conn.execute("SELECT * FROM jobs ORDER BY category, name").fetchall()
        return [self._row_to_job(r) for r in rows]

    def count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) AS cnt FROM jobs").fetchone()
        return row["cnt"]
