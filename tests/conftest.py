"""Pytest configuration and fixtures for docstore tests."""
from __future__ import annotations

import json
import tempfile
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from docstore.config import get_config
from docstore.models import Author, Document
from docstore.storage.document_store import DocumentStore


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep DOCSTORE_* env vars and cached configs from leaking between tests."""
    for var in ("DOCSTORE_SOURCE_FILE", "DOCSTORE_VERBOSE", "DOCSTORE_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    get_config(clear_cache=True)
    yield
    get_config(clear_cache=True)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def author() -> Author:
    return Author(id="author1", name="John Doe")


@pytest.fixture
def other_author() -> Author:
    return Author(id="author2", name="Jane Smith")


@pytest.fixture
def store() -> DocumentStore:
    """Create an empty document store."""
    return DocumentStore()


@pytest.fixture
def sample_documents(author: Author, other_author: Author, now: datetime) -> list[Document]:
    """Three documents spread over authors, titles and creation times."""
    return [
        Document(
            id="doc1",
            title="Title1",
            content="Content1",
            author=author,
            created=now - timedelta(hours=1),
        ),
        Document(
            id="doc2",
            title="AnotherTitle",
            content="DifferentContent",
            author=other_author,
            created=now,
        ),
        Document(
            id="doc3",
            title="Title3",
            content="Notes about Content3",
            author=other_author,
            created=now + timedelta(hours=1),
        ),
    ]


@pytest.fixture
def populated_store(store: DocumentStore, sample_documents: list[Document]) -> DocumentStore:
    """Store holding ``sample_documents``."""
    for doc in sample_documents:
        store.save(doc)
    return store


@pytest.fixture
def seed_file(temp_dir: Path, sample_documents: list[Document]) -> Path:
    """JSON seed file holding ``sample_documents``."""
    path = temp_dir / "documents.json"
    path.write_text(
        json.dumps([doc.model_dump(mode="json") for doc in sample_documents]),
        encoding="utf-8",
    )
    return path
