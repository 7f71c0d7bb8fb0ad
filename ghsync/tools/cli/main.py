"""
Entry point of `ghsync` CLI.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

import dotenv
from click.exceptions import BadParameter
from pydantic import ValidationError
from typer import Context, Exit, Option

from ...core import (
    GhSyncError,
    LoggingNotifier,
    RecurringTask,
    Settings,
    SettingsStore,
    SyncEngine,
    TargetRegistry,
    Vault,
)
from . import config, note, target
from ._utils import MainTyper, get_root_context, logger, lookup_param

CONFIG_FILENAME = ".ghsync.yaml"
"""
Default name of settings file, placed in vault root.
"""

dotenv.load_dotenv()

app = MainTyper(
    "ghsync",
    help="Push notes from a local vault to files in GitHub repositories",
)


@app.callback()
def main(
    ctx: Context,
    vault_dir: Path = Option(
        ".",
        "--vault",
        help="Root folder of vault",
        envvar="GHSYNC_VAULT",
        exists=True,
        file_okay=False,
    ),
    config_file: Path
    | None = Option(
        None,
        help=f".yaml file containing settings and sync targets, '{CONFIG_FILENAME}' in vault root by default",
        envvar="GHSYNC_CONFIG_FILE",
        dir_okay=False,
    ),
    token: str
    | None = Option(
        None,
        help="GitHub personal access token, overriding the configured token without saving it",
        envvar="GITHUB_TOKEN",
    ),
    verbose: bool = Option(
        False,
        "-v",
        "--verbose",
        help="Enable debug logging",
    ),
):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    vault = Vault(vault_dir, logger=logger)
    store = SettingsStore(
        config_file or vault.root / CONFIG_FILENAME, logger=logger
    )

    try:
        settings = store.load()
    except (ValueError, ValidationError) as e:
        raise BadParameter(
            f"failed to load config file '{store.path}': {e}",
            ctx=ctx,
            param=lookup_param(ctx, "config_file"),
        )

    ctx.obj = RootContext(
        ctx=ctx,
        vault=vault,
        store=store,
        settings=settings,
        token=token.strip() if token else None,
    )


app.add_typer(target.app)
app.add_typer(note.app)
app.add_typer(config.app)


@app.command()
def check(ctx: Context):
    """
    Check GitHub access token
    """
    root_context = get_root_context(ctx)
    settings = root_context.effective_settings

    if not settings.has_credential:
        logger.error("No GitHub access token configured")
        raise Exit(code=1)

    engine = root_context.create_engine()

    try:
        login = engine.client.get_user()
    except GhSyncError as e:
        logger.error(str(e))
        raise Exit(code=1)

    logger.info(f"Authenticated to '{settings.api_url}' as '{login}'")


@app.command()
def sync(ctx: Context):
    """
    Sync all notes having a sync target
    """
    engine = get_root_context(ctx).create_engine()
    summary = engine.sync_all()

    if summary.failed:
        raise Exit(code=1)


@app.command()
def watch(
    ctx: Context,
    interval: int
    | None = Option(
        None,
        help="Minutes between syncs, overriding the configured interval",
        min=1,
    ),
):
    """
    Sync on startup if enabled, then sync all notes at an interval until
    interrupted
    """
    root_context = get_root_context(ctx)
    settings = root_context.effective_settings
    interval_norm = interval or settings.sync_interval

    if interval_norm < 1:
        logger.error(
            "No sync interval configured; pass --interval or set one with 'ghsync config set --interval'"
        )
        raise Exit(code=1)

    engine = root_context.create_engine()
    engine.on_startup()

    task = RecurringTask.from_minutes(
        interval_norm, engine.sync_all, name="ghsync-watch", logger=logger
    )

    logger.info(f"Auto sync enabled every {interval_norm} minute(s)")

    with task:
        try:
            while not task.wait(1.0):
                pass
        except KeyboardInterrupt:
            logger.info("Stopping auto sync")


def run():
    app()


@dataclass(kw_only=True)
class RootContext:
    ctx: Context
    vault: Vault
    store: SettingsStore
    settings: Settings
    token: str | None = None
    """
    Token passed on the command line, used instead of the configured token
    and never saved.
    """

    @property
    def effective_settings(self) -> Settings:
        """
        Settings with any overrides from the command line applied.
        """
        if self.token:
            return self.settings.model_copy(
                update={"github_token": self.token}
            )
        return self.settings

    @cached_property
    def registry(self) -> TargetRegistry:
        """
        Registry which also follows notes renamed or deleted via CLI.
        """
        registry = TargetRegistry(self.settings, self.store, logger=logger)
        registry.attach(self.vault.events)
        return registry

    def create_engine(self) -> SyncEngine:
        return SyncEngine(
            self.registry,
            self.effective_settings,
            self.vault,
            notifier=LoggingNotifier(logger),
            logger=logger,
        )


if __name__ == "__main__":
    app()
