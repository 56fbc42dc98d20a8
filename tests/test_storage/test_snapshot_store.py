"""Tests for SnapshotStore."""


class TestSnapshots:
    def test_create_stores_json(self, character_store, snapshot_store):
        character = character_store.create("Haurchefant", "Coeurl")
        payload = {"level": 90, "jobs": ["Paladin"]}

        snapshot = snapshot_store.create(character.id, payload)

        assert snapshot.source == "lodestone"
        assert snapshot_store.get_payload(snapshot) == payload

    def test_latest_is_most_recent(self, character_store, snapshot_store):
        character = character_store.create("Aymeric", "Coeurl")
        snapshot_store.create(character.id, {"n": 1})
        snapshot_store.create(character.id, {"n": 2}, source="manual")

        latest = snapshot_store.get_latest(character.id)
        assert snapshot_store.get_payload(latest) == {"n": 2}
        assert latest.source == "manual"

    def test_latest_none_without_snapshots(self, character_store, snapshot_store):
        character = character_store.create("Ysayle", "Coeurl")
        assert snapshot_store.get_latest(character.id) is None
