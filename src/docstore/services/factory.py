"""Store factory for dependency injection."""
from __future__ import annotations

import logging
from pathlib import Path

from docstore.config import get_config
from docstore.loader import load_documents, seed_store
from docstore.storage import DocumentStore

logger = logging.getLogger(__name__)


class StoreFactory:
    """Factory for creating document stores from the app config."""

    def __init__(self, source_file: Path | str | None = None):
        """Initialize the store factory."""
        self._config = get_config(source_file=source_file)

    @property
    def source_file(self) -> Path | None:
        """Seed file the created stores are loaded from, if any."""
        return self._config.source_file

    def create_store(self) -> DocumentStore:
        """Create a DocumentStore instance.

        Returns:
            A new store, seeded from the configured source file when one is set.

        Raises:
            LoaderError: If the source file cannot be loaded.
        """
        store = DocumentStore()
        if self.source_file is not None:
            count = seed_store(store, load_documents(self.source_file))
            logger.info("Seeded store with %d documents from %s", count, self.source_file)
        return store


def get_store_factory(source_file: Path | str | None = None) -> StoreFactory:
    """Create a StoreFactory instance.

    Returns:
        A StoreFactory instance.
    """
    return StoreFactory(source_file=source_file)
