"""Tests for TrackerService."""

from __future__ import annotations

import pytest

from ffxiv_tracker.services.tracker import TrackerService, determine_job_category
from tests.conftest import make_achievement_record


@pytest.fixture
def service(db, db_path) -> TrackerService:
    return TrackerService(db_path)


@pytest.mark.parametrize(
    "job_name, category",
    [
        ("Paladin", "Tank"),
        ("Sage", "Healer"),
        ("Reaper", "Melee DPS"),
        ("Dancer", "Ranged DPS"),
        ("Blue Mage", "Magical DPS"),
        ("Culinarian", "Crafter"),
        ("Fisher", "Gatherer"),
        ("Viper", "Unknown"),
        ("paladin", "Unknown"),
    ],
)
def test_determine_job_category(job_name, category):
    assert determine_job_category(job_name) == category


class TestCharacters:
    def test_create_and_lookup(self, service):
        created = service.create_character("Minfilia", "Lamia", "42")
        found = service.get_character_by_name_and_server("Minfilia", "Lamia")
        assert found.id == created.id

    def test_get_character_missing(self, service):
        assert service.get_character("missing") is None

    def test_profile_includes_jobs_and_achievements(self, service, achievement_store):
        character = service.create_character("Papalymo", "Lamia")
        service.update_character_job(character.id, "Black Mage", 60, 100)
        achievement = achievement_store.upsert(make_achievement_record())
        achievement_store.award(character.id, achievement.id)

        profile = service.get_character(character.id)

        assert profile.character.name == "Papalymo"
        assert [(cj.job_name, cj.level) for cj in profile.jobs] == [("Black Mage", 60)]
        assert [a.game_id for a in profile.achievements] == [1001]
        assert profile.achievement_points == 5

    def test_profile_without_achievements_has_zero_points(self, service):
        character = service.create_character("Alphinaud", "Sargatanas")
        profile = service.get_character(character.id)

        assert profile.achievements == []
        assert profile.achievement_points == 0


class TestUpdateCharacterJob:
    def test_creates_job_with_derived_category(self, service, job_store):
        character = service.create_character("Yda", "Lamia")
        service.update_character_job(character.id, "Monk", 50, 10)

        assert job_store.get_by_name("Monk").category == "Melee DPS"

    def test_unknown_job_gets_unknown_category(self, service, job_store):
        character = service.create_character("Yda", "Lamia")
        service.update_character_job(character.id, "Beastmaster", 1, 0)

        assert job_store.get_by_name("Beastmaster").category == "Unknown"

    def test_updates_existing_progress(self, service):
        character = service.create_character("Yda", "Lamia")
        service.update_character_job(character.id, "Monk", 50, 10)
        updated = service.update_character_job(character.id, "Monk", 51, 20)

        assert (updated.level, updated.experience) == (51, 20)
        assert len(service.get_character(character.id).jobs) == 1

    def test_bumps_character_updated_at(self, service, character_store):
        character = service.create_character("Yda", "Lamia")
        service.update_character_job(character.id, "Monk", 50, 10)

        assert character_store.get_by_id(character.id).updated_at >= character.updated_at


class TestSnapshots:
    def test_latest_snapshot(self, service):
        character = service.create_character("Louisoix", "Lamia")
        service.create_snapshot(character.id, {"level": 1})
        service.create_snapshot(character.id, {"level": 2}, source="api")

        latest = service.get_latest_snapshot(character.id)
        assert latest.source == "api"
        assert '"level": 2' in latest.data_json
