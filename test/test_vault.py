from pathlib import Path

from conftest import PAGE_CONTENT, PAGE_ID, TODO_ID
from pytest import raises

from ghsync import NoteUnreadable, Vault


def test_read(vault: Vault):
    assert vault.read(PAGE_ID) == PAGE_CONTENT
    assert vault.exists(PAGE_ID)
    assert vault.resolve(PAGE_ID) == vault.root / "docs" / "page.md"

    with raises(NoteUnreadable):
        vault.read("missing.md")

    # folders aren't notes
    assert not vault.exists("docs")
    with raises(NoteUnreadable):
        vault.read("docs")


def test_names(vault: Vault):
    assert vault.display_name(PAGE_ID) == "page.md"
    assert vault.basename(PAGE_ID) == "page"


def test_normalize(vault: Vault):
    assert vault.normalize("docs/page.md") == PAGE_ID
    assert vault.normalize(Path("docs") / ".." / "docs" / "page.md") == PAGE_ID
    assert vault.normalize(vault.root / "todo.md") == TODO_ID

    # need not exist
    assert vault.normalize("new/note.md") == "new/note.md"

    with raises(ValueError):
        vault.normalize("../outside.md")

    with raises(ValueError):
        vault.normalize(".")


def test_notes(vault: Vault):
    (vault.root / "image.png").write_bytes(b"")
    assert vault.notes() == [PAGE_ID, TODO_ID]


def test_move(vault: Vault):
    renamed: list[tuple[str, str]] = []
    vault.events.subscribe_rename(lambda old, new: renamed.append((old, new)))

    vault.move(PAGE_ID, "archive/page.md")

    assert renamed == [(PAGE_ID, "archive/page.md")]
    assert not vault.exists(PAGE_ID)
    assert vault.read("archive/page.md") == PAGE_CONTENT

    with raises(FileNotFoundError):
        vault.move(PAGE_ID, "other.md")

    with raises(FileExistsError):
        vault.move("archive/page.md", TODO_ID)

    assert len(renamed) == 1


def test_delete(vault: Vault):
    deleted: list[str] = []
    vault.events.subscribe_delete(deleted.append)

    vault.delete(TODO_ID)

    assert deleted == [TODO_ID]
    assert not vault.exists(TODO_ID)

    with raises(FileNotFoundError):
        vault.delete(TODO_ID)
