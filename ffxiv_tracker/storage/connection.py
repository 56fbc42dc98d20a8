"""
SQLite connection factory.

All database access in the project goes through get_connection().

- WAL mode: concurrent reads while a write is in progress.
- check_same_thread=False: connections are shared across threads;
  SQLite's own locking plus the busy timeout serializes writers.
- Rows come back as sqlite3.Row (dict-like access).
- Foreign keys are enforced (OFF by default in SQLite).
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from ffxiv_tracker.config.settings import StorageSettings, get_settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()

# One connection per database path
_connections: dict[str, sqlite3.Connection] = {}


def _resolve(db_path: Optional[Path]) -> tuple[Path, StorageSettings]:
    if db_path is None:
        settings = get_settings()
        return settings.db_path, settings.storage
    return db_path, StorageSettings()


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """
    Get the shared SQLite connection for ``db_path``.

    Args:
        db_path: Path to the SQLite database file. If None, uses
                 the default path from settings.
    """
    db_path, storage = _resolve(db_path)
    db_key = str(db_path)

    with _lock:
        if db_key in _connections:
            return _connections[db_key]

        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Opening SQLite database: %s", db_path)

        conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10.0)
        conn.execute(f"PRAGMA journal_mode={storage.journal_mode}")
        conn.execute(f"PRAGMA busy_timeout={storage.busy_timeout_ms}")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
        conn.row_factory = sqlite3.Row

        _connections[db_key] = conn
        return conn


def close_connection(db_path: Optional[Path] = None) -> None:
    """Close the connection for a given db_path (or the default)."""
    db_path, _ = _resolve(db_path)

    with _lock:
        conn = _connections.pop(str(db_path), None)
        if conn is not None:
            conn.close()
            logger.info("Database connection closed: %s", db_path)


def close_all_connections() -> None:
    """Close all open connections. Used during shutdown."""
    with _lock:
        for key, conn in list(_connections.items()):
            conn.close()
            logger.info("Database connection closed: %s", key)
        _connections.clear()
