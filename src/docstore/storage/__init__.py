"""Storage module for docstore."""
from docstore.storage.document_store import DocumentRepository, DocumentStore

__all__ = ["DocumentRepository", "DocumentStore"]
