import ghsync


def test_import():
    # make sure symbols are accessible by fully qualified path
    assert isinstance(ghsync.core.SyncEngine, type)
    assert isinstance(ghsync.core.target.SyncTarget, type)
    assert isinstance(ghsync.core.settings.Settings, type)
    assert isinstance(ghsync.core.registry.TargetRegistry, type)
    assert isinstance(ghsync.core.client.ContentsClient, type)
    assert isinstance(ghsync.core.vault.Vault, type)
    assert isinstance(ghsync.core.schedule.RecurringTask, type)
    assert issubclass(ghsync.core.exceptions.ParseError, ghsync.GhSyncError)

    # ensure no internal symbols accidentally exported
    assert all([not sym.startswith("_") for sym in ghsync.__all__])
