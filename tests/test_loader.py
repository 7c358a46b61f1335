"""Tests for loading documents from seed files."""
from __future__ import annotations

import json

import pytest

from docstore.exceptions import LoaderError
from docstore.loader import load_documents, seed_store


class TestLoadDocuments:
    """Tests for load_documents."""

    def test_load_json(self, seed_file, sample_documents):
        """A JSON array loads into equal documents."""
        assert load_documents(seed_file) == sample_documents

    def test_load_jsonl_skips_blank_lines(self, temp_dir, sample_documents):
        path = temp_dir / "documents.jsonl"
        lines = [doc.model_dump_json() for doc in sample_documents]
        path.write_text("\n".join(lines[:1] + [""] + lines[1:]) + "\n", encoding="utf-8")

        assert load_documents(path) == sample_documents

    def test_load_accepts_string_path(self, seed_file):
        assert len(load_documents(str(seed_file))) == 3

    def test_records_without_id_are_loaded(self, temp_dir):
        """Ids are optional in seed files; the store assigns them on save."""
        path = temp_dir / "documents.json"
        path.write_text(json.dumps([{"title": "No id"}]), encoding="utf-8")

        documents = load_documents(path)

        assert documents[0].id is None
        assert documents[0].title == "No id"

    def test_missing_file_raises(self, temp_dir):
        """A missing file raises LoaderError with the cause attached."""
        path = temp_dir / "missing.json"

        with pytest.raises(LoaderError) as exc_info:
            load_documents(path)

        assert "Failed to read file" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_unsupported_extension_raises(self, temp_dir):
        path = temp_dir / "documents.csv"
        path.write_text("id,title\n", encoding="utf-8")

        with pytest.raises(LoaderError, match="Unsupported file type"):
            load_documents(path)

    def test_malformed_json_raises(self, temp_dir):
        path = temp_dir / "documents.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(LoaderError, match="Invalid documents"):
            load_documents(path)

    def test_json_object_instead_of_list_raises(self, temp_dir):
        path = temp_dir / "documents.json"
        path.write_text(json.dumps({"id": "doc1"}), encoding="utf-8")

        with pytest.raises(LoaderError):
            load_documents(path)

    def test_bad_jsonl_line_reports_line_number(self, temp_dir):
        path = temp_dir / "documents.jsonl"
        path.write_text('{"id": "doc1"}\n{"id": \n', encoding="utf-8")

        with pytest.raises(LoaderError, match=r"documents\.jsonl:2"):
            load_documents(path)

    def test_invalid_field_type_raises(self, temp_dir):
        path = temp_dir / "documents.json"
        path.write_text(json.dumps([{"created": "not a date"}]), encoding="utf-8")

        with pytest.raises(LoaderError):
            load_documents(path)


class TestSeedStore:
    """Tests for seed_store."""

    def test_seed_store_saves_all(self, store, sample_documents):
        assert seed_store(store, sample_documents) == 3
        assert store.find_by_id("doc2") is sample_documents[1]

    def test_seed_store_assigns_missing_ids(self, store, temp_dir):
        path = temp_dir / "documents.json"
        path.write_text(json.dumps([{"title": "A"}, {"title": "B"}]), encoding="utf-8")

        seed_store(store, load_documents(path))

        assert store.count() == 2
        assert all(doc.id for doc in store.all())
