import pytest

from jvc.hashing import hash_file
from jvc.objects import EntryType, FileEntry, JvcDao, RepositoryError
from jvc.repo_init import init_repository
from jvc.save import JvcSave
from jvc.status import JvcStatus


@pytest.fixture
def repo(tmp_path):
    init_repository(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"alpha content")
    return tmp_path


def _tree(root):
    dao = JvcDao(root)
    return dao.tree_entries(dao.get_version(dao.get_head("master")).tree_index)


def test_first_save_creates_initial_version(repo):
    index = JvcSave(repo).execute()
    dao = JvcDao(repo)
    assert index == "0"
    assert dao.get_head("master") == index
    version = dao.get_version(index)
    assert version.parent_version is None
    assert version.message == "Initial save"


def test_first_save_stores_blob(repo):
    JvcSave(repo).execute()
    entries = _tree(repo)
    expected = hash_file(repo / "a.txt")
    assert entries["a.txt"] == FileEntry(EntryType.BLOB, expected)
    assert (repo / ".jvc" / "obj" / "blob" / expected).read_bytes() == b"alpha content"


def test_custom_message_is_kept(repo):
    index = JvcSave(repo).execute("first snapshot")
    assert JvcDao(repo).get_version(index).message == "first snapshot"


def test_no_changes_returns_none(repo, capsys):
    saver = JvcSave(repo)
    first = saver.execute()
    capsys.readouterr()
    assert saver.execute() is None
    assert "No changes detected!" in capsys.readouterr().out
    assert JvcDao(repo).get_head("master") == first


def test_modification_creates_child_version(repo):
    saver = JvcSave(repo)
    first = saver.execute()
    (repo / "a.txt").write_bytes(b"changed content")
    second = saver.execute()
    dao = JvcDao(repo)
    version = dao.get_version(second)
    assert version.parent_version == first
    assert version.message == f"Saved version with index {second}"
    assert dao.get_head("master") == second
    assert _tree(repo)["a.txt"].code_name == hash_file(repo / "a.txt")


def test_save_leaves_no_unsaved_changes(repo):
    (repo / "sub").mkdir()
    (repo / "sub" / "b.txt").write_text("bee", encoding="utf-8")
    saver = JvcSave(repo)
    saver.execute()
    assert not JvcStatus(repo).unsaved_changes_exist()
    (repo / "sub" / "b.txt").write_text("bee two", encoding="utf-8")
    (repo / "c.txt").write_text("sea", encoding="utf-8")
    saver.execute()
    assert not JvcStatus(repo).unsaved_changes_exist()


def test_subdirectory_becomes_tree(repo):
    (repo / "sub").mkdir()
    (repo / "sub" / "b.txt").write_text("bee", encoding="utf-8")
    JvcSave(repo).execute()
    entries = _tree(repo)
    assert entries["sub"].type is EntryType.TREE
    sub_entries = JvcDao(repo).tree_entries(entries["sub"].code_name)
    assert sub_entries["b.txt"].code_name == hash_file(repo / "sub" / "b.txt")


def test_unchanged_subtree_is_reused(repo):
    (repo / "sub").mkdir()
    (repo / "sub" / "b.txt").write_text("bee", encoding="utf-8")
    saver = JvcSave(repo)
    saver.execute()
    before = _tree(repo)
    (repo / "a.txt").write_bytes(b"other")
    saver.execute()
    after = _tree(repo)
    assert after["sub"] == before["sub"]
    assert after["a.txt"] != before["a.txt"]


def test_deleted_file_leaves_tree(repo):
    (repo / "b.txt").write_text("bee", encoding="utf-8")
    saver = JvcSave(repo)
    saver.execute()
    (repo / "b.txt").unlink()
    assert saver.execute() is not None
    assert set(_tree(repo)) == {"a.txt"}


def test_ignored_files_are_not_saved(repo):
    (repo / ".jvcIgnore").write_text("build.log\n", encoding="utf-8")
    (repo / "build.log").write_text("noise", encoding="utf-8")
    JvcSave(repo).execute()
    entries = _tree(repo)
    assert "build.log" not in entries
    assert ".jvc" not in entries
    assert "a.txt" in entries


def test_save_outside_repository_fails(tmp_path):
    (tmp_path / "a.txt").write_text("x", encoding="utf-8")
    with pytest.raises(RepositoryError):
        JvcSave(tmp_path).execute()


def test_unreadable_head_fails(repo):
    JvcSave(repo).execute()
    (repo / ".jvc" / "head" / "master").write_text("NULL", encoding="utf-8")
    with pytest.raises(RepositoryError):
        JvcSave(repo).execute()