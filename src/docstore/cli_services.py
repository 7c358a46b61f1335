"""CLI service layer for docstore.

Provides shared consoles, exit codes, and store creation for CLI commands.
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console

from docstore.config import DocStoreConfig, get_config
from docstore.exceptions import ConfigError, LoaderError
from docstore.services import StoreFactory, get_store_factory
from docstore.storage import DocumentStore

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INVALID_ARG = 2

console = Console(stderr=False)  # stdout for normal output
error_console = Console(stderr=True)  # stderr for errors


def _escape_rich(text: str) -> str:
    """Escape brackets to prevent Rich markup interpretation."""
    return text.replace("[", "\\[").replace("]", "\\]")


def configure_logging(config: DocStoreConfig, verbose: bool = False) -> None:
    """Route library logging to stderr, at DEBUG when verbose."""
    level = logging.DEBUG if verbose or config.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=config.log_format,
        stream=sys.stderr,
        force=True,
    )


class CLIContext:
    """Invocation-scoped context for CLI state."""

    def __init__(self, source_file: Path | None = None):
        self.source_file = source_file


class CLIServiceContext:
    """Invocation-scoped context for CLI services.

    Encapsulates:
    - Source file resolution from Typer context
    - Config loading
    - Store factory creation
    """

    def __init__(self, ctx: typer.Context):
        self._ctx = ctx
        self._config: DocStoreConfig | None = None
        self._store_factory: StoreFactory | None = None

    @property
    def source_file(self) -> Path | None:
        """Get source file from CLI context."""
        if self._ctx.obj is not None and isinstance(self._ctx.obj, CLIContext):
            return self._ctx.obj.source_file
        return None

    def get_config(self) -> DocStoreConfig:
        """Load and return config.

        Raises:
            ConfigError: If config cannot be loaded
        """
        if self._config is None:
            self._config = get_config(source_file=self.source_file)
        return self._config

    def get_store_factory(self) -> StoreFactory:
        """Get or create the store factory."""
        if self._store_factory is None:
            self._store_factory = get_store_factory(source_file=self.get_config().source_file)
        return self._store_factory

    def create_store(self) -> DocumentStore:
        """Create a seeded document store."""
        return self.get_store_factory().create_store()


@contextmanager
def get_cli_store(
    ctx: typer.Context,
) -> Generator[tuple[CLIServiceContext, DocumentStore], None, None]:
    """Context manager yielding a seeded store for a CLI command.

    Usage:
        with get_cli_store(ctx) as (svc, store):
            results = store.search(request)

    Raises:
        typer.Exit: If config or the source file cannot be loaded
    """
    svc = CLIServiceContext(ctx)

    try:
        svc.get_config()
    except ConfigError as e:
        error_console.print(f"[red]Error: Invalid configuration:[/red] {_escape_rich(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)

    try:
        store = svc.create_store()
    except LoaderError as e:
        error_console.print(f"[red]Error loading documents:[/red] {_escape_rich(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)

    yield svc, store
