"""docstore - In-memory document store with multi-criterion search."""
from docstore.models import Author, Document, SearchRequest
from docstore.storage import DocumentRepository, DocumentStore

__version__ = "0.1.0"

__all__ = [
    "Author",
    "Document",
    "DocumentRepository",
    "DocumentStore",
    "SearchRequest",
]
