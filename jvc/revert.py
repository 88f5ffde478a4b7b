"""Restoration of the working directory to a saved version."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from jvc.objects import (
    BlobStore,
    EntryType,
    JvcDao,
    RepositoryError,
    StrPath,
    Version,
)
from jvc.status import JvcStatus


class UnsavedChangesError(RepositoryError):
    """The working directory has changes that were not saved."""


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


class JvcRevert:
    """Rewrites tracked files and folders to match a target version.

    Files tracked by the current version but absent from the target are
    removed; untracked and ignored files are left alone.
    """

    def __init__(self, root: StrPath = ".", branch: str = "master") -> None:
        self.root = Path(root)
        self.branch = branch
        self._dao = JvcDao(self.root)
        self._blobs = BlobStore(self.root)

    def _recreate(self, directory: Path, target_tree: str, current_tree: Optional[str]) -> None:
        target_entries = self._dao.tree_entries(target_tree)
        current_entries = self._dao.tree_entries(current_tree) if current_tree else {}

        for name, entry in target_entries.items():
            path = directory / name
            if entry.type is EntryType.BLOB:
                if path.is_dir():
                    _remove(path)
                self._blobs.restore_file(entry.code_name, path)
                continue
            match = current_entries.get(name)
            if match is not None and match.type is EntryType.TREE and path.is_dir():
                self._recreate(path, entry.code_name, match.code_name)
            else:
                if path.exists() and not path.is_dir():
                    _remove(path)
                path.mkdir(exist_ok=True)
                self._recreate(path, entry.code_name, None)

        for name in current_entries:
            if name not in target_entries:
                _remove(directory / name)

    def execute(self, target_version: str) -> Version:
        """Restore ``target_version``, move the head to it and return it."""
        if JvcStatus(self.root, self.branch).unsaved_changes_exist():
            raise UnsavedChangesError(
                "Cannot revert when there are unsaved changes! "
                "Use 'jvc save' to save changes before revert."
            )

        head = self._dao.get_head(self.branch)
        current_tree = self._dao.get_version(head).tree_index if head is not None else None
        target = self._dao.get_version(target_version)

        self._recreate(self.root, target.tree_index, current_tree)
        self._dao.update_head(self.branch, target.version_index)
        print(f"HEAD is updated to version {target.version_index}: '{target.message}'")
        return target