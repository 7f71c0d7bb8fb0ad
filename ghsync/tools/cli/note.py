"""
Operations on individual notes.
"""
from __future__ import annotations

import typer
from click import BadParameter
from typer import Argument, Context, Exit, Option

from ._utils import (
    MainTyper,
    console,
    get_note_id,
    get_root_context,
    logger,
    lookup_param,
    notes_table,
)

app = MainTyper(
    "note",
    help="Operations on individual notes",
)


@app.command()
def sync(
    ctx: Context,
    note: str = Argument(help="Path to note, relative to vault root"),
):
    """
    Sync note to its GitHub sync target
    """
    root_context = get_root_context(ctx)
    note_id = get_note_id(ctx, root_context.vault, note, "note")

    if note_id not in root_context.registry:
        raise BadParameter(
            f"no GitHub sync target set for '{note_id}'; set one with 'ghsync target set'",
            ctx=ctx,
            param=lookup_param(ctx, "note"),
        )

    outcome = root_context.create_engine().sync_note(note_id)

    if not outcome.success:
        raise Exit(code=1)


@app.command()
def mv(
    ctx: Context,
    src: str = Argument(help="Current path to note, relative to vault root"),
    dest: str = Argument(help="New path to note, relative to vault root"),
):
    """
    Rename note, keeping its GitHub sync target
    """
    root_context = get_root_context(ctx)
    vault = root_context.vault

    src_id = get_note_id(ctx, vault, src, "src")
    dest_id = get_note_id(ctx, vault, dest, "dest")

    # subscribe registry to rename events
    _ = root_context.registry

    try:
        vault.move(src_id, dest_id)
    except FileNotFoundError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, "src"))
    except FileExistsError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, "dest"))

    logger.info(f"Moved '{src_id}' -> '{dest_id}'")


@app.command()
def rm(
    ctx: Context,
    note: str = Argument(help="Path to note, relative to vault root"),
    yes: bool = Option(
        False,
        "-y",
        "--yes",
        help="Don't ask for confirmation before deleting note",
    ),
):
    """
    Delete note and its GitHub sync target; the GitHub file is kept
    """
    root_context = get_root_context(ctx)
    vault = root_context.vault
    note_id = get_note_id(ctx, vault, note, "note")

    if not vault.exists(note_id):
        raise BadParameter(
            f"note does not exist: '{note_id}'",
            ctx=ctx,
            param=lookup_param(ctx, "note"),
        )

    if not yes:
        if not typer.confirm(f"Delete note '{note_id}'?"):
            return

    # subscribe registry to delete events
    _ = root_context.registry

    vault.delete(note_id)
    logger.info(f"Deleted '{note_id}'")


@app.command("list")
def list_(
    ctx: Context,
    untargeted: bool = Option(
        False,
        "--untargeted",
        help="Only list notes without a GitHub sync target",
    ),
):
    """
    List notes in vault with their GitHub sync targets
    """
    root_context = get_root_context(ctx)
    targets = root_context.registry.all_targets()

    note_ids = root_context.vault.notes()
    if untargeted:
        note_ids = [n for n in note_ids if n not in targets]

    if not len(note_ids):
        logger.info("No notes found")
        return

    console.print(notes_table(note_ids, targets))
