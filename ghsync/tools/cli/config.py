"""
View and update persisted settings.
"""
from __future__ import annotations

from click import BadParameter
from pydantic import ValidationError
from typer import Context, Option

from ...core import Settings
from ._utils import MainTyper, console, get_root_context, logger

app = MainTyper(
    "config",
    help="View and update settings",
)


@app.command()
def show(ctx: Context):
    """
    Show current settings; the access token is masked
    """
    settings = get_root_context(ctx).settings

    token = settings.github_token
    masked_token = f"{token[:4]}{'*' * (len(token) - 4)}" if token else "(not set)"
    interval = (
        f"{settings.sync_interval} minute(s)"
        if settings.interval_enabled
        else "disabled"
    )

    console.print(f"GitHub token: {masked_token}", highlight=False)
    console.print(f"API URL: {settings.api_url}", highlight=False)
    console.print(f"Sync on startup: {settings.sync_on_load}", highlight=False)
    console.print(
        f"Check status on startup: {settings.check_status_on_load}",
        highlight=False,
    )
    console.print(f"Sync interval: {interval}", highlight=False)
    console.print(
        f"Sync targets: {len(settings.note_targets)}", highlight=False
    )


@app.command("set")
def set_(
    ctx: Context,
    token: str
    | None = Option(
        None,
        "--token",
        help="GitHub personal access token; needs repo scope for private repositories",
    ),
    sync_on_load: bool
    | None = Option(
        None,
        "--sync-on-load/--no-sync-on-load",
        help="Whether to sync all targeted notes when 'ghsync watch' starts",
    ),
    check_status_on_load: bool
    | None = Option(
        None,
        "--check-status-on-load/--no-check-status-on-load",
        help="Whether startup actions are enabled",
    ),
    interval: int
    | None = Option(
        None,
        "--interval",
        help="Minutes between syncs in 'ghsync watch', 0 to disable",
        min=0,
    ),
    api_url: str
    | None = Option(
        None,
        "--api-url",
        help="Base URL of GitHub REST API",
    ),
):
    """
    Update settings
    """
    root_context = get_root_context(ctx)
    settings = root_context.settings

    update = {
        "github_token": token,
        "sync_on_load": sync_on_load,
        "check_status_on_load": check_status_on_load,
        "sync_interval": interval,
        "api_url": api_url,
    }
    update = {k: v for k, v in update.items() if v is not None}

    if not len(update):
        logger.info("No settings to update")
        return

    # validate updated settings as a whole before applying
    try:
        updated = Settings.model_validate(settings.model_dump() | update)
    except ValidationError as e:
        raise BadParameter(str(e), ctx=ctx)

    for name in update:
        setattr(settings, name, getattr(updated, name))

    root_context.store.save(settings)
    logger.info(f"Updated settings: {', '.join(sorted(update))}")
