"""
Utilities specific to CLI functionality.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from click import BadParameter, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typer import Context, Typer

from ...core import SyncTarget, Vault

if TYPE_CHECKING:
    from .main import RootContext


console = Console()

rich_handler = RichHandler(
    console=console,
    rich_tracebacks=True,
    show_level=True,
    show_time=True,
    show_path=False,
)
rich_handler.setFormatter(logging.Formatter("%(message)s"))

logger = logging.getLogger("ghsync")
logger.setLevel(logging.INFO)
logger.addHandler(rich_handler)
logger.propagate = False


class MainTyper(Typer):
    """
    Typer app with preconfigured settings.
    """

    def __init__(self, name: str, *, help: str):
        return super().__init__(
            name=name,
            help=help,
            rich_markup_mode="markdown",
            no_args_is_help=True,
            add_completion=False,
        )


def get_root_context(ctx: Context) -> RootContext:
    from .main import RootContext

    root_context = ctx.find_object(RootContext)
    assert isinstance(root_context, RootContext)
    return root_context


def lookup_param(ctx: Context, name: str) -> Parameter:
    """
    Lookup param by name.
    """
    param = next((p for p in ctx.command.params if p.name == name), None)
    assert param, f"Could not find param with name: {name}"
    return param


def get_note_id(ctx: Context, vault: Vault, note: str, param_name: str) -> str:
    """
    Normalize a note path passed by the user to its note id.
    """
    try:
        return vault.normalize(note)
    except ValueError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, param_name))


def targets_table(targets: dict[str, SyncTarget]) -> Table:
    """
    Get table of notes with their sync targets.
    """
    table = Table(title="Configured Sync Targets")

    table.add_column("File")
    table.add_column("Repository")
    table.add_column("Target Path")
    table.add_column("Branch")

    for note_id, target in sorted(targets.items()):
        table.add_row(note_id, target.repo_slug, target.file_path, target.branch)

    return table


def notes_table(note_ids: list[str], targets: dict[str, SyncTarget]) -> Table:
    """
    Get table of notes with the sync target of each, if any.
    """
    table = Table(title="Notes")

    table.add_column("File")
    table.add_column("Sync Target")

    for note_id in note_ids:
        target = targets.get(note_id)
        table.add_row(note_id, str(target) if target else "-")

    return table
