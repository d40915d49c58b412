"""Tests for the property store."""

from buildinfo.core.store import PropertyStore


class TestPropertyStore:
    """Test store insertion and ordering."""

    def test_empty_store(self):
        store = PropertyStore()

        assert len(store) == 0
        assert list(store.entries_sorted_by_key()) == []

    def test_put_overwrites_existing_key(self):
        """Test later puts replace earlier values."""
        store = PropertyStore()
        store.put("build.x", "1")
        store.put("build.x", "2")

        assert len(store) == 1
        assert store.get("build.x") == "2"

    def test_put_none_stores_empty_string(self):
        store = PropertyStore()
        store.put("build.missing", None)

        assert "build.missing" in store
        assert store.get("build.missing") == ""

    def test_entries_sorted_by_key(self, sample_store):
        """Test iteration order ignores insertion order."""
        keys = [key for key, _ in sample_store.entries_sorted_by_key()]

        assert keys == ["artifact.id", "build.maven.activeProfiles", "build.os.name"]

    def test_sorting_is_lexicographic(self):
        """Test ordering compares by code point, so uppercase sorts first."""
        store = PropertyStore()
        for key in ["b", "a.b", "B", "a", "a.B"]:
            store.put(key, "")

        assert [key for key, _ in store] == ["B", "a", "a.B", "a.b", "b"]

    def test_iteration_is_restartable(self, sample_store):
        """Test repeated calls yield the same sequence."""
        first = list(sample_store.entries_sorted_by_key())
        second = list(sample_store.entries_sorted_by_key())

        assert first == second

    def test_iteration_reflects_later_puts(self, sample_store):
        sample_store.put("aaa", "first")

        assert next(sample_store.entries_sorted_by_key()) == ("aaa", "first")

    def test_as_dict(self, sample_store):
        assert sample_store.as_dict() == {
            "artifact.id": "demo-app",
            "build.maven.activeProfiles": "",
            "build.os.name": "TestOS",
        }

    def test_get_default(self):
        store = PropertyStore()

        assert store.get("missing") is None
        assert store.get("missing", "fallback") == "fallback"
