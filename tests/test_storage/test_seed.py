"""Tests for database seeding."""

from ffxiv_tracker.storage.character_store import CharacterStore
from ffxiv_tracker.storage.connection import close_connection
from ffxiv_tracker.storage.job_store import JobStore
from ffxiv_tracker.storage.progress_store import CharacterJobStore
from ffxiv_tracker.storage.seed import JOB_CATALOGUE, seed_database


class TestSeed:
    def test_seeds_jobs_and_test_character(self, db_path):
        try:
            summary = seed_database(db_path)

            assert summary == {
                "jobs_inserted": 31,
                "characters_inserted": 1,
                "character_jobs_inserted": 2,
            }
            assert JobStore(db_path).count() == len(JOB_CATALOGUE) == 31
            assert JobStore(db_path).get_by_name("Blue Mage").max_level == 70

            character = CharacterStore(db_path).get_by_name_and_server("Test Character", "Gilgamesh")
            assert character.lodestone_id == "12345678"

            levels = {
                cj.job_name: (cj.level, cj.experience)
                for cj in CharacterJobStore(db_path).get_for_character(character.id)
            }
            assert levels == {"Paladin": (85, 2_500_000), "White Mage": (72, 1_800_000)}
        finally:
            close_connection(db_path)

    def test_seed_is_idempotent(self, db_path):
        try:
            seed_database(db_path)
            summary = seed_database(db_path)

            assert summary == {
                "jobs_inserted": 0,
                "characters_inserted": 0,
                "character_jobs_inserted": 0,
            }
            assert JobStore(db_path).count() == 31
            assert CharacterStore(db_path).count() == 1
        finally:
            close_connection(db_path)
