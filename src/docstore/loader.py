"""Load documents from JSON or JSONL seed files."""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from docstore.exceptions import LoaderError
from docstore.models import Document
from docstore.storage import DocumentRepository

logger = logging.getLogger(__name__)

_DOCUMENT_LIST = TypeAdapter(list[Document])

SUPPORTED_SUFFIXES = (".json", ".jsonl")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoaderError(f"Failed to read file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise LoaderError(f"Failed to decode file {path}: {e}") from e


def _parse_json(path: Path, text: str) -> list[Document]:
    try:
        return _DOCUMENT_LIST.validate_json(text)
    except ValidationError as e:
        raise LoaderError(f"Invalid documents in {path}: {e}") from e


def _parse_jsonl(path: Path, text: str) -> list[Document]:
    documents: list[Document] = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            documents.append(Document.model_validate_json(line))
        except ValidationError as e:
            raise LoaderError(f"Invalid document at {path}:{line_no}: {e}") from e
    return documents


def load_documents(path: str | Path) -> list[Document]:
    """Read documents from a ``.json`` array or a ``.jsonl`` file.

    Raises LoaderError if the file cannot be read, has an unsupported
    extension, or holds records that do not parse as documents.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise LoaderError(
            f"Unsupported file type '{path.suffix}' for {path}. "
            f"Use one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    text = _read_text(path)
    if suffix == ".jsonl":
        documents = _parse_jsonl(path, text)
    else:
        documents = _parse_json(path, text)

    logger.debug("Loaded %d documents from %s", len(documents), path)
    return documents


def seed_store(store: DocumentRepository, documents: list[Document]) -> int:
    """Save ``documents`` into ``store`` and return how many were saved."""
    for document in documents:
        store.save(document)
    return len(documents)
