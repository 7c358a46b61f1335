"""Configuration management."""
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docstore.exceptions import ConfigError

DEFAULT_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class DocStoreConfig(BaseSettings):
    """Configuration for the docstore CLI."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Seed file loaded into the in-memory store
    source_file: Path | None = None

    # Logging
    verbose: bool = False
    log_format: str = DEFAULT_LOG_FORMAT

    @field_validator("source_file")
    @classmethod
    def _reject_directory(cls, value: Path | None) -> Path | None:
        if value is not None and value.is_dir():
            raise ConfigError(f"Source file {value} is a directory")
        return value


@lru_cache
def _get_config_cached(source_file: Path) -> DocStoreConfig:
    """Cached configuration lookup for explicit source_file values."""
    return DocStoreConfig(source_file=source_file)


def get_config(
    source_file: str | Path | None = None,
    clear_cache: bool = False,
) -> DocStoreConfig:
    """Get configuration instance.

    Args:
        source_file: Optional seed file. If provided, overrides DOCSTORE_SOURCE_FILE.
        clear_cache: If True, clear the cache before returning config.

    Note: When source_file is None the config is rebuilt on every call so
    that changes to the environment are picked up. Configs for an explicit
    source_file are cached, so DOCSTORE_VERBOSE and DOCSTORE_LOG_FORMAT keep
    the values read on first lookup until clear_cache is passed.
    """
    if clear_cache:
        _get_config_cached.cache_clear()

    if source_file is None:
        return DocStoreConfig()

    return _get_config_cached(Path(source_file))
