"""
Seed the database with the job catalogue and a test character.

Every step is an insert-if-missing, so running the seed twice leaves
the database unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ffxiv_tracker.storage.character_store import CharacterStore
from ffxiv_tracker.storage.job_store import JobStore
from ffxiv_tracker.storage.progress_store import CharacterJobStore
from ffxiv_tracker.storage.schema import initialize_database

logger = logging.getLogger(__name__)

# (name, category, max_level)
JOB_CATALOGUE: list[tuple[str, str, int]] = [
    # Tanks
    ("Paladin", "Tank", 90),
    ("Warrior", "Tank", 90),
    ("Dark Knight", "Tank", 90),
    ("Gunbreaker", "Tank", 90),
    # Healers
    ("White Mage", "Healer", 90),
    ("Scholar", "Healer", 90),
    ("Astrologian", "Healer", 90),
    ("Sage", "Healer", 90),
    # DPS
    ("Monk", "Melee DPS", 90),
    ("Dragoon", "Melee DPS", 90),
    ("Ninja", "Melee DPS", 90),
    ("Samurai", "Melee DPS", 90),
    ("Reaper", "Melee DPS", 90),
    ("Bard", "Ranged DPS", 90),
    ("Machinist", "Ranged DPS", 90),
    ("Dancer", "Ranged DPS", 90),
    ("Black Mage", "Magical DPS", 90),
    ("Summoner", "Magical DPS", 90),
    ("Red Mage", "Magical DPS", 90),
    ("Blue Mage", "Magical DPS", 70),
    # Disciples of the Hand
    ("Carpenter", "Crafter", 90),
    ("Blacksmith", "Crafter", 90),
    ("Armorer", "Crafter", 90),
    ("Goldsmith", "Crafter", 90),
    ("Leatherworker", "Crafter", 90),
    ("Weaver", "Crafter", 90),
    ("Alchemist", "Crafter", 90),
    ("Culinarian", "Crafter", 90),
    # Disciples of the Land
    ("Miner", "Gatherer", 90),
    ("Botanist", "Gatherer", 90),
    ("Fisher", "Gatherer", 90),
]

TEST_CHARACTER_NAME = "Test Character"
TEST_CHARACTER_SERVER = "Gilgamesh"
TEST_CHARACTER_LODESTONE_ID = "12345678"

# job name -> (level, experience)
TEST_CHARACTER_JOBS = {
    "Paladin": (85, 2_500_000),
    "White Mage": (72, 1_800_000),
}


def seed_database(db_path: Optional[Path] = None) -> dict[str, int]:
    """
    Seed jobs and the test character.

    Returns:
        Summary dict with counts of rows inserted by this run.
    """
    initialize_database(db_path)

    jobs = JobStore(db_path)
    characters = CharacterStore(db_path)
    character_jobs = CharacterJobStore(db_path)

    jobs_inserted = 0
    for name, category, max_level in JOB_CATALOGUE:
        if jobs.insert_if_missing(name, category, max_level):
            jobs_inserted += 1

    character = characters.get_by_name_and_server(TEST_CHARACTER_NAME, TEST_CHARACTER_SERVER)
    character_created = character is None
    if character is None:
        character = characters.create(
            TEST_CHARACTER_NAME, TEST_CHARACTER_SERVER, TEST_CHARACTER_LODESTONE_ID
        )

    levels_inserted = 0
    existing = {cj.job_name for cj in character_jobs.get_for_character(character.id)}
    for job_name, (level, experience) in TEST_CHARACTER_JOBS.items():
        if job_name in existing:
            continue
        job = jobs.get_by_name(job_name)
        if job is None:
            continue
        character_jobs.upsert(character.id, job.id, level, experience)
        levels_inserted += 1

    summary = {
        "jobs_inserted": jobs_inserted,
        "characters_inserted": int(character_created),
        "character_jobs_inserted": levels_inserted,
    }
    logger.info("Database seeded: %s", summary)
    return summary
