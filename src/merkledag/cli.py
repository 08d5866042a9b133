"""
merkledag CLI

Implements 2 CLI verbs on top of the Operations facade:
- add: Encode a file or directory into the object store, print the root digest
- show: Decode and print a single stored object
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import typer

from .operations import Operations, OpsConfig, run_and_exit
from .operations.printers import print_object
from .settings import Settings, create_settings_from_env

app = typer.Typer(name="merkledag", help="Content-addressed Merkle DAG builder")


def _load_settings(**overrides) -> Settings:
    """
    Load settings from the environment and apply CLI overrides.

    Options left unset on the command line (None) keep their environment
    or default value.
    """
    settings = create_settings_from_env()
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        settings = dataclasses.replace(settings, **changes)
    return settings


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def add(
    path: str = typer.Argument(..., help="File or directory to add"),
    store: Optional[str] = typer.Option(None, "--store", help="Object store directory"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Maximum chunk size in bytes"),
    hash_algorithm: Optional[str] = typer.Option(None, "--hash", help="Hash algorithm (hashlib name)"),
    compress: Optional[bool] = typer.Option(None, "--compress/--no-compress", help="zstd-compress stored objects"),
    follow_symlinks: Optional[bool] = typer.Option(None, "--follow-symlinks/--no-follow-symlinks", help="Traverse symlinks"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output")
) -> None:
    """Add a file or directory to the store and print its root digest."""

    def _add() -> None:
        _configure_logging(verbose)
        settings = _load_settings(
            store_dir=store,
            chunk_size=chunk_size,
            hash_algorithm=hash_algorithm,
            compress=compress,
            follow_symlinks=follow_symlinks,
        )
        ops = Operations(config=OpsConfig(verbose=verbose), settings=settings)
        result = ops.add(path)
        ops.report_add(result)

    run_and_exit(_add)


@app.command()
def show(
    digest: str = typer.Argument(..., help="Object digest (hex)"),
    store: Optional[str] = typer.Option(None, "--store", help="Object store directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output")
) -> None:
    """Show a single stored object."""

    def _show() -> None:
        _configure_logging(verbose)
        settings = _load_settings(store_dir=store)
        ops = Operations(config=OpsConfig(verbose=verbose), settings=settings)
        print_object(ops.show(digest))

    run_and_exit(_show)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
