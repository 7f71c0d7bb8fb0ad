from pathlib import Path

from conftest import PAGE_ID, PAGE_TARGET, TODO_ID, TODO_TARGET
from pytest import MonkeyPatch, raises

from ghsync import (
    Settings,
    SettingsStore,
    SyncTarget,
    TargetRegistry,
    Vault,
    VaultEvents,
)


def test_set_target(registry: TargetRegistry, store: SettingsStore):
    registry.set_target(PAGE_ID, PAGE_TARGET)

    assert registry.all_targets() == {PAGE_ID: PAGE_TARGET}
    assert registry.get_target(PAGE_ID) == PAGE_TARGET
    assert PAGE_ID in registry
    assert len(registry) == 1

    # persisted before returning
    assert store.load().note_targets == {PAGE_ID: PAGE_TARGET}


def test_set_target_replaces(registry: TargetRegistry, store: SettingsStore):
    registry.set_target(PAGE_ID, PAGE_TARGET)
    registry.set_target(PAGE_ID, TODO_TARGET)

    assert registry.all_targets() == {PAGE_ID: TODO_TARGET}
    assert store.load().note_targets == {PAGE_ID: TODO_TARGET}


def test_all_targets_snapshot(registry: TargetRegistry):
    registry.set_target(PAGE_ID, PAGE_TARGET)

    snapshot = registry.all_targets()
    registry.set_target(TODO_ID, TODO_TARGET)

    assert snapshot == {PAGE_ID: PAGE_TARGET}
    assert len(registry) == 2


def test_clear_target(registry: TargetRegistry, store: SettingsStore):
    registry.set_target(PAGE_ID, PAGE_TARGET)
    registry.set_target(TODO_ID, TODO_TARGET)

    assert registry.clear_target(PAGE_ID) is True
    assert registry.all_targets() == {TODO_ID: TODO_TARGET}
    assert store.load().note_targets == {TODO_ID: TODO_TARGET}

    # clearing again is a no-op
    assert registry.clear_target(PAGE_ID) is False
    assert registry.all_targets() == {TODO_ID: TODO_TARGET}


def test_clear_missing_does_not_save(registry: TargetRegistry, store: SettingsStore):
    assert registry.clear_target(PAGE_ID) is False
    assert not store.path.exists()


def test_rename_note(registry: TargetRegistry, store: SettingsStore):
    registry.set_target(PAGE_ID, PAGE_TARGET)

    assert registry.rename_note(PAGE_ID, "archive/page.md") is True
    assert registry.all_targets() == {"archive/page.md": PAGE_TARGET}
    assert store.load().note_targets == {"archive/page.md": PAGE_TARGET}


def test_rename_note_without_target(registry: TargetRegistry):
    registry.set_target(TODO_ID, TODO_TARGET)

    assert registry.rename_note(PAGE_ID, "archive/page.md") is False
    assert registry.all_targets() == {TODO_ID: TODO_TARGET}


def test_on_note_deleted(registry: TargetRegistry):
    registry.set_target(PAGE_ID, PAGE_TARGET)

    registry.on_note_deleted(PAGE_ID)
    assert registry.all_targets() == {}

    # no error if absent
    registry.on_note_deleted(PAGE_ID)
    assert registry.all_targets() == {}


def test_attach_events(registry: TargetRegistry):
    events = VaultEvents()
    registry.attach(events)
    registry.set_target(PAGE_ID, PAGE_TARGET)
    registry.set_target(TODO_ID, TODO_TARGET)

    events.emit_rename(PAGE_ID, "page.md")
    events.emit_delete(TODO_ID)

    assert registry.all_targets() == {"page.md": PAGE_TARGET}


def test_follow_vault_lifecycle(
    registry: TargetRegistry, vault: Vault, store: SettingsStore
):
    registry.attach(vault.events)
    registry.set_target(PAGE_ID, PAGE_TARGET)
    registry.set_target(TODO_ID, TODO_TARGET)

    vault.move(PAGE_ID, "archive/2024/page.md")
    vault.delete(TODO_ID)

    assert registry.all_targets() == {"archive/2024/page.md": PAGE_TARGET}

    # reload to ensure persisted
    assert store.load().note_targets == {"archive/2024/page.md": PAGE_TARGET}


def test_reload(tmp_path: Path):
    store = SettingsStore(tmp_path / "nested" / "ghsync.yaml")
    registry = TargetRegistry(Settings(github_token="abc"), store)

    registry.set_target(PAGE_ID, PAGE_TARGET)

    settings = store.load()
    assert settings.github_token == "abc"
    assert settings.note_targets[PAGE_ID] == PAGE_TARGET
    assert isinstance(settings.note_targets[PAGE_ID], SyncTarget)


def test_failed_save(
    registry: TargetRegistry,
    settings: Settings,
    store: SettingsStore,
    monkeypatch: MonkeyPatch,
):
    registry.set_target(PAGE_ID, PAGE_TARGET)

    def fail_save(updated: Settings):
        raise OSError("No space left on device")

    monkeypatch.setattr(store, "save", fail_save)

    with raises(OSError):
        registry.set_target(TODO_ID, TODO_TARGET)

    with raises(OSError):
        registry.rename_note(PAGE_ID, "archive/page.md")

    with raises(OSError):
        registry.clear_target(PAGE_ID)

    # unchanged in memory and on disk
    assert registry.all_targets() == {PAGE_ID: PAGE_TARGET}
    assert settings.note_targets == {PAGE_ID: PAGE_TARGET}

    assert store.load().note_targets == {PAGE_ID: PAGE_TARGET}
