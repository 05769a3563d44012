"""
Tests for transcollect.core.catalog_merger.

Verifies:
- existing values are never replaced, absent keys are added (value = key)
- merged order: existing entries first, then new keys in discovery order
- a broken catalog is skipped while other catalogs are still merged
"""

import pytest

from transcollect.core import catalog_merger
from transcollect.core.catalog_format import dump_catalog, load_catalog
from transcollect.core.catalog_merger import (
    find_catalogs,
    merge_catalog_file,
    merge_into_catalogs,
    merge_keys,
)
from transcollect.core.errors import CatalogLoadError, WriteError
from tests.conftest import write_file


def write_catalog(path, entries):
    return write_file(path, dump_catalog(list(entries.items())))


class TestMergeKeys:
    def test_existing_value_is_kept(self):
        outcome = merge_keys({"greeting": "Hello!"}, ["greeting"])

        assert outcome.messages == {"greeting": "Hello!"}
        assert outcome.added == ()

    def test_absent_key_is_added_with_itself_as_value(self):
        outcome = merge_keys({"greeting": "Hello!"}, ["farewell"])

        assert outcome.messages == {"greeting": "Hello!", "farewell": "farewell"}
        assert outcome.added == ("farewell",)

    def test_order_existing_then_new(self):
        outcome = merge_keys({"b": "B", "a": "A"}, ["c", "a", "d"])

        assert list(outcome.messages) == ["b", "a", "c", "d"]
        assert outcome.added == ("c", "d")

    def test_input_mapping_is_not_modified(self):
        existing = {"a": "A"}

        merge_keys(existing, ["b"])

        assert existing == {"a": "A"}

    def test_adds_exactly_the_absent_keys(self):
        existing = {"x": "X", "y": "Y"}
        keys = ["y", "z", "x", "w"]

        outcome = merge_keys(existing, keys)

        assert set(outcome.messages) - set(existing) == {"z", "w"}
        assert all(outcome.messages[k] == v for k, v in existing.items())


class TestFindCatalogs:
    def test_finds_nested_catalogs_sorted(self, tmp_path):
        write_catalog(tmp_path / "lang" / "fr" / "messages.yaml", {})
        write_catalog(tmp_path / "lang" / "de" / "messages.yaml", {})
        write_catalog(tmp_path / "lang" / "dump" / "app.yaml", {})
        (tmp_path / "lang" / "en" / "messages.yaml").mkdir(parents=True)

        found = find_catalogs(tmp_path / "lang", "messages.yaml")

        assert found == [
            tmp_path / "lang" / "de" / "messages.yaml",
            tmp_path / "lang" / "fr" / "messages.yaml",
        ]

    def test_glob_pattern(self, tmp_path):
        write_catalog(tmp_path / "lang" / "messages.yaml", {})
        write_catalog(tmp_path / "lang" / "messages.yml", {})
        write_catalog(tmp_path / "lang" / "validation.yaml", {})

        found = find_catalogs(tmp_path / "lang", "messages.*")

        assert [p.name for p in found] == ["messages.yaml", "messages.yml"]

    def test_missing_directory(self, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            assert find_catalogs(tmp_path / "nope", "messages.yaml") == []
        assert "does not exist" in caplog.text


class TestMergeCatalogFile:
    def test_scenario_greeting_and_farewell(self, tmp_path):
        path = write_catalog(tmp_path / "messages.yaml", {"greeting": "Hello!"})

        added = merge_catalog_file(path, ["greeting", "farewell"])

        assert added == ("farewell",)
        assert load_catalog(path) == {"greeting": "Hello!", "farewell": "farewell"}
        text = path.read_text(encoding="utf-8")
        assert "  'farewell': 'farewell'" in text.splitlines()
        assert text.startswith("# THIS FILE WAS UPDATED BY TRANSLATION COLLECTOR\n")

    def test_rewrites_even_without_new_keys(self, tmp_path):
        path = write_file(
            tmp_path / "messages.yaml",
            "format: transcollect-catalog\nversion: 1\nmessages:\n  greeting: Hello!\n",
        )

        assert merge_catalog_file(path, ["greeting"]) == ()
        assert "  'greeting': 'Hello!'" in path.read_text(encoding="utf-8").splitlines()

    def test_broken_catalog_is_left_untouched(self, tmp_path):
        broken = "messages: [not, a, catalog\n"
        path = write_file(tmp_path / "messages.yaml", broken)

        with pytest.raises(CatalogLoadError):
            merge_catalog_file(path, ["a"])

        assert path.read_text(encoding="utf-8") == broken

    def test_write_failure_raises_write_error(self, tmp_path, monkeypatch):
        path = write_catalog(tmp_path / "messages.yaml", {"a": "A"})

        def failing_write(*args, **kwargs):
            raise OSError("Simulated disk error")

        monkeypatch.setattr(catalog_merger, "write_text_atomic", failing_write)

        with pytest.raises(WriteError, match="Simulated disk error"):
            merge_catalog_file(path, ["b"])
        assert load_catalog(path) == {"a": "A"}


class TestMergeIntoCatalogs:
    def test_broken_file_does_not_stop_others(self, tmp_path, caplog):
        good_de = write_catalog(tmp_path / "de" / "messages.yaml", {"greeting": "Hallo!"})
        broken = write_file(tmp_path / "en" / "messages.yaml", "format: [\n")
        good_fr = write_catalog(tmp_path / "fr" / "messages.yaml", {})

        with caplog.at_level("ERROR"):
            report = merge_into_catalogs([good_de, broken, good_fr], iter(["greeting", "farewell"]))

        assert report.has_errors
        assert list(report.failed) == [broken]
        assert report.updated == {good_de: ("farewell",), good_fr: ("greeting", "farewell")}
        assert report.added_count == 3
        assert load_catalog(good_de) == {"greeting": "Hallo!", "farewell": "farewell"}
        assert load_catalog(good_fr) == {"greeting": "greeting", "farewell": "farewell"}
        assert "Skipping catalog" in caplog.text

    def test_no_catalogs(self):
        report = merge_into_catalogs([], ["a"])

        assert not report.has_errors
        assert report.updated == {}
