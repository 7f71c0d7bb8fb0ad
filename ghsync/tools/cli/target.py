"""
Configuration of sync targets of individual notes.
"""
from __future__ import annotations

from click import BadParameter
from typer import Argument, Context, Exit

from ...core import ParseError, parse_target_url
from ._utils import (
    MainTyper,
    console,
    get_note_id,
    get_root_context,
    logger,
    lookup_param,
    targets_table,
)

app = MainTyper(
    "target",
    help="Configure which GitHub file each note syncs to",
)


@app.command("set")
def set_(
    ctx: Context,
    note: str = Argument(help="Path to note, relative to vault root"),
    url: str = Argument(
        help="GitHub file URL, e.g. https://github.com/user/repo/blob/main/docs/page.md"
    ),
):
    """
    Set GitHub sync target of note, replacing any existing target
    """
    root_context = get_root_context(ctx)
    note_id = get_note_id(ctx, root_context.vault, note, "note")

    try:
        target = parse_target_url(url)
    except ParseError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, "url"))

    if not root_context.vault.exists(note_id):
        logger.warning(f"Note does not exist yet: '{note_id}'")

    root_context.registry.set_target(note_id, target)
    logger.info(f"Saved GitHub sync target of '{note_id}': {target}")


@app.command()
def clear(
    ctx: Context,
    note: str = Argument(help="Path to note, relative to vault root"),
):
    """
    Clear GitHub sync target of note
    """
    root_context = get_root_context(ctx)
    note_id = get_note_id(ctx, root_context.vault, note, "note")

    if root_context.registry.clear_target(note_id):
        logger.info(f"Cleared GitHub sync target of '{note_id}'")
    else:
        logger.info(f"No GitHub sync target set for '{note_id}'")


@app.command()
def show(
    ctx: Context,
    note: str = Argument(help="Path to note, relative to vault root"),
):
    """
    Show URL of note's GitHub sync target
    """
    root_context = get_root_context(ctx)
    note_id = get_note_id(ctx, root_context.vault, note, "note")

    target = root_context.registry.get_target(note_id)
    if target is None:
        logger.error(f"No GitHub sync target set for '{note_id}'")
        raise Exit(code=1)

    console.print(target.source_url or str(target), soft_wrap=True)


@app.command("list")
def list_(ctx: Context):
    """
    List all notes with GitHub sync targets
    """
    targets = get_root_context(ctx).registry.all_targets()

    if not len(targets):
        logger.info(
            "No sync targets configured yet; use 'ghsync target set' to set a GitHub sync target"
        )
        return

    console.print(targets_table(targets))
