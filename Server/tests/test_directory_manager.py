"""
Tests for DirectoryManager filesystem helpers
"""

from managers import DirectoryManager


def _Manager(tmp_path):
    return DirectoryManager(
        bookmark_directory=tmp_path / "bookmarks",
        cache_directory=tmp_path / "cache",
        backup_directory=tmp_path / "backups",
        logs_directory=tmp_path / "logs"
    )


def test_check_write_access_creates_directory(tmp_path):
    manager = _Manager(tmp_path)
    target = tmp_path / "new" / "place"

    assert manager.CheckWriteAccess(target)
    assert target.is_dir()
    # Probe file is removed again
    assert list(target.iterdir()) == []


def test_copy_skips_existing_files(tmp_path):
    manager = _Manager(tmp_path)
    source = tmp_path / "source"
    target = tmp_path / "target"
    (source / "sub").mkdir(parents=True)
    (source / "a.png").write_text("a")
    (source / "sub" / "b.png").write_text("b")
    target.mkdir()
    (target / "a.png").write_text("already here")

    copied = manager.CopyDirectoryToDirectory(source, target)

    assert copied == 1
    assert (target / "a.png").read_text() == "already here"
    assert (target / "sub" / "b.png").read_text() == "b"


def test_copy_missing_source(tmp_path):
    manager = _Manager(tmp_path)
    assert manager.CopyDirectoryToDirectory(tmp_path / "missing", tmp_path / "target") == 0


def test_move_bookmarks(tmp_path):
    manager = _Manager(tmp_path)
    source = tmp_path / "bookmarks"
    target = tmp_path / "elsewhere" / "bookmarks"
    (source / "3").mkdir(parents=True)
    (source / "3" / "page.png").write_text("page")

    manager.MoveBookmarks(source, target)

    assert (target / "3" / "page.png").read_text() == "page"
    assert not source.exists()
    assert manager.bookmark_directory == str(target)


def test_move_bookmarks_into_nested_directory(tmp_path):
    """Target inside the source keeps the copied files"""
    manager = _Manager(tmp_path)
    source = tmp_path / "data"
    target = source / "bookmarks"
    source.mkdir()
    (source / "page.png").write_text("page")

    manager.MoveBookmarks(source, target)

    assert (target / "page.png").read_text() == "page"
    assert not (source / "page.png").exists()


def test_is_inside(tmp_path):
    manager = _Manager(tmp_path)
    assert manager.IsInside(tmp_path / "a" / "b", tmp_path / "a")
    assert not manager.IsInside(tmp_path / "ab", tmp_path / "a")
    assert not manager.IsInside(tmp_path / "a", tmp_path / "a")


def test_clear_and_delete_missing_directory(tmp_path):
    manager = _Manager(tmp_path)
    manager.ClearAndDeleteDirectory(tmp_path / "nothing")


def test_move_bookmarks_to_ancestor_directory(tmp_path):
    """Target above the source still receives every file before the source is removed"""
    manager = _Manager(tmp_path)
    target = tmp_path / "lib" / "bookmarks"
    source = target / "old" / "bookmarks"
    (source / "1").mkdir(parents=True)
    (source / "1" / "page.jpg").write_text("page")

    copied = manager.MoveBookmarks(source, target)

    assert copied == 1
    assert (target / "1" / "page.jpg").read_text() == "page"
    assert not source.exists()


def test_find_first_missing(tmp_path):
    manager = _Manager(tmp_path)
    (tmp_path / "a").mkdir()

    assert manager.FindFirstMissing(tmp_path / "a") is None
    assert manager.FindFirstMissing(tmp_path / "a" / "b" / "c") == str(tmp_path / "a" / "b")
