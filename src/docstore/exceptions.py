"""Custom exceptions for docstore."""


class DocStoreError(Exception):
    """Base exception for docstore."""
    pass


class ConfigError(DocStoreError):
    """Configuration errors."""
    pass


class LoaderError(DocStoreError):
    """Errors reading or parsing a document seed file."""
    pass
