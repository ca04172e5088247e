"""
Generation Archive Tests

Tests the history file store and the copy-on-write archive.
"""

import json
from dataclasses import replace

import pytest

from seo_studio.models import SEOVariant
from seo_studio.persistence import GenerationArchive, HistoryStore


@pytest.fixture
def store(tmp_path):
    return HistoryStore(str(tmp_path / "history"))


class TestHistoryStore:
    """Tests for the JSON file behind the archive."""

    def test_missing_file_is_empty(self, store):
        assert store.load() == []

    def test_file_name(self, store, tmp_path):
        assert store.path == tmp_path / "history" / "seo_tool_history.json"

    def test_save_and_load(self, store, generation_record):
        store.save([generation_record])

        assert store.load() == [generation_record]
        assert not store.path.with_suffix(".json.tmp").exists()

    def test_corrupt_file_is_empty(self, store):
        store.base_path.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert store.load() == []

    def test_non_list_is_empty(self, store):
        store.base_path.mkdir(parents=True)
        store.path.write_text(json.dumps({"id": "x"}), encoding="utf-8")

        assert store.load() == []


class TestGenerationArchive:
    """Tests for archive mutations."""

    def test_add_prepends(self, archive, generation):
        second = replace(generation, id="gen-2")

        archive.add(generation)
        archive.add(second)

        assert [g.id for g in archive.snapshot] == ["gen-2", "gen-1"]
        assert len(archive) == 2

    def test_persisted_across_instances(self, archive, generation):
        archive.add(generation)

        reopened = GenerationArchive(archive.store)

        assert reopened.get("gen-1") == generation

    def test_snapshots_are_immutable(self, archive, generation):
        before = archive.snapshot
        archive.add(generation)

        assert before == ()
        assert len(archive.snapshot) == 1

    def test_delete(self, archive, generation):
        archive.add(generation)
        archive.add(replace(generation, id="gen-2"))

        remaining = archive.delete("gen-1")

        assert [g.id for g in remaining] == ["gen-2"]
        assert [r["id"] for r in archive.store.load()] == ["gen-2"]

    def test_delete_unknown_id(self, archive, generation):
        archive.add(generation)

        assert len(archive.delete("missing")) == 1

    def test_update_unknown_id(self, archive, generation):
        with pytest.raises(KeyError):
            archive.update(generation)

    def test_add_enhanced_variant(self, archive, generation):
        archive.add(generation)
        variant = SEOVariant(h1="New H1", meta_title="New title", meta_description="New description")

        updated = archive.add_enhanced_variant("gen-1", variant)

        assert len(updated.seo_variants) == 4
        assert updated.seo_variants[-1].is_enhanced
        stored = archive.store.load()[0]
        assert stored["seoVariants"][-1]["isEnhanced"] is True

    def test_replace_schema(self, archive, generation):
        archive.add(generation)
        schema = {"@context": "https://schema.org", "@graph": [{"@type": "FAQPage"}]}

        updated = archive.replace_schema("gen-1", schema)

        assert updated.schema_jsonld == schema
        assert archive.get("gen-1").schema_commentary.endswith("[Enhanced via Chat Assistant]")

    def test_replace_schema_unknown_id(self, archive):
        with pytest.raises(KeyError):
            archive.replace_schema("missing", {"@graph": []})

    def test_unreadable_records_skipped(self, store, generation_record):
        store.save([generation_record, {"id": "bad", "modelProvider": "claude"}])

        archive = GenerationArchive(store)

        assert [g.id for g in archive.snapshot] == ["gen-1"]
