from ffxiv_tracker.storage.models import (
    AchievementRecord,
    Character,
    CharacterAchievement,
    CharacterJob,
    CharacterSnapshot,
    JobRecord,
)
from ffxiv_tracker.storage.connection import get_connection, close_connection
from ffxiv_tracker.storage.schema import initialize_database
from ffxiv_tracker.storage.character_store import CharacterStore
from ffxiv_tracker.storage.job_store import JobStore
from ffxiv_tracker.storage.progress_store import AchievementStore, CharacterJobStore
from ffxiv_tracker.storage.snapshot_store import SnapshotStore

__all__ = [
    "AchievementRecord",
    "Character",
    "CharacterAchievement",
    "CharacterJob",
    "CharacterSnapshot",
    "JobRecord",
    "get_connection",
    "close_connection",
    "initialize_database",
    "CharacterStore",
    "JobStore",
    "AchievementStore",
    "CharacterJobStore",
    "SnapshotStore",
]
