"""Tests for reconciling a fresh scan against the persisted report."""

from __future__ import annotations

from souper.report.io import encode
from souper.report.reconcile import combine_meta, reconcile
from souper.scanner.models import DependencyRecord, Snapshot

# ── helpers ──────────────────────────────────────────────────────────────


def _soup(name: str, version: str = "1.0.0", **meta) -> DependencyRecord:
    return DependencyRecord(name=name, version=version, meta=meta)


def _snapshot(**paths: list[DependencyRecord]) -> Snapshot:
    # keyword names cannot hold "/", so "__" stands for it
    return Snapshot({path.replace("__", "/"): set(records) for path, records in paths.items()})


def _only(snapshot: Snapshot, path: str) -> DependencyRecord:
    [record] = snapshot.records(path)
    return record


class TestCombineMeta:
    def test_base_wins(self):
        assert combine_meta({"a": "x"}, {"a": ""}) == {"a": "x"}

    def test_missing_keys_taken_from_fresh(self):
        assert combine_meta({"a": "x"}, {"b": ""}) == {"a": "x", "b": ""}

    def test_base_key_order_first(self):
        assert list(combine_meta({"z": 1, "a": 2}, {"m": 3, "z": 4})) == ["z", "a", "m"]

    def test_inputs_untouched(self):
        base, fresh = {"a": "x"}, {"b": ""}
        combine_meta(base, fresh)
        assert base == {"a": "x"}
        assert fresh == {"b": ""}


class TestPaths:
    def test_add_context(self):
        fresh = _snapshot(src__package_json=[_soup("some-dep")])
        result = reconcile(Snapshot.empty(), fresh)
        assert result.paths() == ["src/package_json"]
        assert encode(result) == encode(fresh)

    def test_remove_context(self):
        base = _snapshot(src__package_json=[_soup("some-dep", note="x")])
        result = reconcile(base, Snapshot.empty())
        assert result.contexts == {}

    def test_keys_equal_fresh_keys(self):
        base = _snapshot(a=[_soup("x")], b=[_soup("y")])
        fresh = _snapshot(b=[_soup("y")], c=[_soup("z")])
        assert reconcile(base, fresh).paths() == ["b", "c"]

    def test_new_path_copied_verbatim(self):
        fresh = _snapshot(Dockerfile=[_soup("ubuntu", "22.04", requirements="")])
        result = reconcile(_snapshot(other=[_soup("ubuntu", "22.04", note="x")]), fresh)
        assert _only(result, "Dockerfile").meta == {"requirements": ""}


class TestSharedPaths:
    def test_added_soup(self):
        base = _snapshot(p=[_soup("some-dep")])
        fresh = _snapshot(p=[_soup("some-dep"), _soup("some-other-dep", requirements="")])
        result = reconcile(base, fresh)
        assert [r.name for r in result.records("p")] == ["some-dep", "some-other-dep"]
        assert result.records("p")[1].meta == {"requirements": ""}

    def test_removed_soup(self):
        base = _snapshot(p=[_soup("some-dep", note="x"), _soup("some-other-dep")])
        fresh = _snapshot(p=[_soup("some-other-dep")])
        result = reconcile(base, fresh)
        assert [r.name for r in result.records("p")] == ["some-other-dep"]

    def test_meta_survives_version_bump(self):
        base = _snapshot(p=[_soup("some-dep", "1.0.0", note="x")])
        fresh = _snapshot(p=[_soup("some-dep", "1.2.0")])
        record = _only(reconcile(base, fresh), "p")
        assert (record.name, record.version) == ("some-dep", "1.2.0")
        assert record.meta == {"note": "x"}

    def test_existing_meta_key_not_overwritten(self):
        base = _snapshot(p=[_soup("some-dep", requirements="a-requirement")])
        fresh = _snapshot(p=[_soup("some-dep", requirements="")])
        assert _only(reconcile(base, fresh), "p").meta == {"requirements": "a-requirement"}

    def test_new_default_key_added_to_existing_meta(self):
        base = _snapshot(p=[_soup("some-dep", requirements="a-requirement")])
        fresh = _snapshot(p=[_soup("some-dep", requirements="", risk="")])
        assert _only(reconcile(base, fresh), "p").meta == {
            "requirements": "a-requirement",
            "risk": "",
        }

    def test_meta_keyed_by_name_not_position(self):
        base = _snapshot(p=[_soup("a", note="for-a"), _soup("b", note="for-b")])
        fresh = _snapshot(p=[_soup("b", "2.0"), _soup("a", "2.0")])
        result = reconcile(base, fresh)
        assert {r.name: r.meta for r in result.records("p")} == {
            "a": {"note": "for-a"},
            "b": {"note": "for-b"},
        }

    def test_same_name_several_versions_keep_own_meta(self):
        base = _snapshot(
            Dockerfile=[_soup("node", "14", stage="old"), _soup("node", "16", stage="new")]
        )
        fresh = _snapshot(Dockerfile=[_soup("node", "14"), _soup("node", "16")])
        result = reconcile(base, fresh)
        assert [r.meta for r in result.records("Dockerfile")] == [
            {"stage": "old"},
            {"stage": "new"},
        ]

    def test_metadata_not_carried_across_paths(self):
        base = _snapshot(a=[_soup("x", note="a-note")], b=[_soup("y")])
        fresh = _snapshot(a=[_soup("y")], b=[_soup("x")])
        result = reconcile(base, fresh)
        assert _only(result, "a").meta == {}
        assert _only(result, "b").meta == {}


class TestProperties:
    def _sample(self) -> Snapshot:
        return _snapshot(
            src__package_json=[_soup("some-dep", note="x"), _soup("other", "2.0")],
            Dockerfile=[_soup("ubuntu", "22.04", requirements="r"), _soup("curl", "unknown")],
        )

    def test_idempotent(self):
        snapshot = self._sample()
        assert encode(reconcile(snapshot, snapshot)) == encode(snapshot)

    def test_repeated_identical_scans(self):
        base = self._sample()
        fresh = _snapshot(
            src__package_json=[_soup("some-dep"), _soup("other", "2.0")],
            Dockerfile=[_soup("ubuntu", "22.04"), _soup("curl", "unknown")],
        )
        once = reconcile(base, fresh)
        twice = reconcile(once, fresh)
        assert encode(once) == encode(twice) == encode(base)

    def test_inputs_not_mutated(self):
        base = self._sample()
        fresh = _snapshot(src__package_json=[_soup("some-dep", "9.9", extra="")])
        base_before = encode(base)
        fresh_before = encode(fresh)
        reconcile(base, fresh)
        assert encode(base) == base_before
        assert encode(fresh) == fresh_before

    def test_idempotent_compares_meta(self):
        snapshot = self._sample()
        assert reconcile(snapshot, snapshot) == snapshot
        assert reconcile(Snapshot.empty(), snapshot) == snapshot
        stripped = _snapshot(
            src__package_json=[_soup("some-dep"), _soup("other", "2.0")],
            Dockerfile=[_soup("ubuntu", "22.04"), _soup("curl", "unknown")],
        )
        assert stripped != snapshot
        assert reconcile(snapshot, stripped) == snapshot
