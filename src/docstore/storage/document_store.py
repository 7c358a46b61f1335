"""In-memory document store with predicate-based search."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Protocol

from docstore.models import Document, SearchRequest

logger = logging.getLogger(__name__)

Predicate = Callable[[Document], bool]


def _match_all(doc: Document) -> bool:
    return True


def title_prefix_predicate(prefixes: Sequence[str] | None) -> Predicate:
    """Match documents whose title starts with any of ``prefixes``."""
    if not prefixes:
        return _match_all
    prefix_tuple = tuple(prefixes)
    return lambda doc: doc.title.startswith(prefix_tuple)


def contains_content_predicate(fragments: Sequence[str] | None) -> Predicate:
    """Match documents whose content contains any of ``fragments`` literally."""
    if not fragments:
        return _match_all
    return lambda doc: any(fragment in doc.content for fragment in fragments)


def author_predicate(author_ids: Sequence[str] | None) -> Predicate:
    """Match documents written by one of ``author_ids``."""
    if not author_ids:
        return _match_all
    wanted = set(author_ids)
    return lambda doc: doc.author.id in wanted


def created_range_predicate(
    created_from: datetime | None,
    created_to: datetime | None,
) -> Predicate:
    """Match documents created within ``[created_from, created_to]``.

    Both bounds are inclusive and either may be omitted.
    """
    if created_from is None and created_to is None:
        return _match_all

    def predicate(doc: Document) -> bool:
        if created_from is not None and doc.created < created_from:
            return False
        if created_to is not None and doc.created > created_to:
            return False
        return True

    return predicate


def build_predicate(request: SearchRequest | None) -> Predicate:
    """Combine every constrained dimension of ``request`` with logical AND."""
    if request is None:
        return _match_all

    predicates = [
        title_prefix_predicate(request.title_prefixes),
        contains_content_predicate(request.contains_contents),
        author_predicate(request.author_ids),
        created_range_predicate(request.created_from, request.created_to),
    ]
    active = [p for p in predicates if p is not _match_all]
    if not active:
        return _match_all
    return lambda doc: all(p(doc) for p in active)


class DocumentRepository(Protocol):
    """Contract shared by document stores."""

    def save(self, document: Document) -> Document: ...

    def search(self, request: SearchRequest | None) -> list[Document]: ...

    def find_by_id(self, doc_id: str) -> Document | None: ...


class DocumentStore:
    """Dictionary-backed document store.

    Documents are held by reference: ``save`` stores and returns the caller's
    object, and re-saving a document under an existing id replaces the entry.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def save(self, document: Document) -> Document:
        """Store a document, assigning a UUID when it has no id."""
        if not document.id:
            document.id = str(uuid.uuid4())
            logger.debug("Assigned id %s to new document", document.id)
        elif document.id in self._documents:
            logger.debug("Overwriting document %s", document.id)

        self._documents[document.id] = document
        return document

    def find_by_id(self, doc_id: str) -> Document | None:
        """Get a document by ID."""
        return self._documents.get(doc_id)

    def search(self, request: SearchRequest | None) -> list[Document]:
        """Return every stored document matching ``request``.

        Dimensions combine with AND; values within a dimension combine with
        OR. A ``None`` request, or one with every field empty, matches all
        documents. Results follow insertion order.
        """
        predicate = build_predicate(request)
        matches = [doc for doc in self._documents.values() if predicate(doc)]
        logger.debug(
            "Search with criteria %s matched %d of %d documents",
            request.active_criteria() if request is not None else [],
            len(matches),
            len(self._documents),
        )
        return matches

    def count(self) -> int:
        """Return the number of documents."""
        return len(self._documents)

    def all(self) -> list[Document]:
        """Get all documents in insertion order."""
        return list(self._documents.values())
