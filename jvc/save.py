"""Snapshot of the working directory as a new version."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jvc.objects import (
    JVC_DIR,
    BlobStore,
    EntryType,
    IndexKind,
    IndexSupplier,
    JvcDao,
    RepositoryError,
    StrPath,
)


class JvcSave:
    """Stores changed files as blobs and changed directories as new trees."""

    def __init__(self, root: StrPath = ".", branch: str = "master") -> None:
        self.root = Path(root)
        self.branch = branch
        self._dao = JvcDao(self.root)
        self._blobs = BlobStore(self.root)
        self._indices = IndexSupplier(self.root)

    def _display(self, path: Path) -> str:
        return str(path.relative_to(self.root))

    @staticmethod
    def _children(directory: Path) -> list[Path]:
        return sorted(directory.iterdir(), key=lambda child: child.name)

    def _store_file(self, path: Path) -> str:
        print(f"Saving {self._display(path)} ...")
        return f"BLOB {self._blobs.create_blob(path)} {path.name}"

    def _new_subtree(self, path: Path, ignores: set[str]) -> str:
        print(f"Saving {self._display(path)} ...")
        index = self._indices.next_index(IndexKind.TREE)
        self._snapshot(path, index, ignores)
        return f"TREE {index} {path.name}"

    def _snapshot(self, directory: Path, tree_index: int, ignores: set[str]) -> None:
        """Write a complete tree for ``directory`` under ``tree_index``."""
        lines = [
            self._new_subtree(child, ignores) if child.is_dir() else self._store_file(child)
            for child in self._children(directory)
            if child.name not in ignores
        ]
        self._blobs.write_tree(tree_index, lines)

    def _update(self, directory: Path, tree_name: str, ignores: set[str]) -> str:
        """Return the tree name for ``directory``, new only if something changed."""
        entries = self._dao.tree_entries(tree_name)
        children = self._children(directory)
        lines: list[str] = []
        changed = False

        for child in children:
            if child.name in ignores:
                continue
            entry = entries.get(child.name)
            if child.is_dir():
                if entry is not None and entry.type is EntryType.TREE:
                    subtree = self._update(child, entry.code_name, ignores)
                    changed = changed or subtree != entry.code_name
                    lines.append(f"TREE {subtree} {child.name}")
                else:
                    changed = True
                    lines.append(self._new_subtree(child, ignores))
            elif (
                entry is not None
                and entry.type is EntryType.BLOB
                and not self._dao.differs(child, entry.code_name)
            ):
                lines.append(f"BLOB {entry.code_name} {child.name}")
            else:
                changed = True
                lines.append(self._store_file(child))

        present = {child.name for child in children}
        if any(name not in present for name in entries):
            changed = True

        if not changed:
            return tree_name
        index = self._indices.next_index(IndexKind.TREE)
        self._blobs.write_tree(index, lines)
        return str(index)

    def execute(self, message: str = "") -> Optional[str]:
        """Save the working directory; return the new version index or None if unchanged."""
        ignores = self._dao.read_ignores()
        head_file = self.root / JVC_DIR / "head" / self.branch

        if not head_file.exists():
            version_index = self._indices.next_index(IndexKind.VERSION)
            tree_index = self._indices.next_index(IndexKind.TREE)
            self._snapshot(self.root, tree_index, ignores)
            text = message or "Initial save"
            self._dao.create_version(version_index, None, tree_index, text)
            self._dao.init_head(self.branch, version_index)
            print(text)
            return str(version_index)

        head = self._dao.get_head(self.branch)
        if head is None:
            raise RepositoryError("Could not open branch head file")
        version = self._dao.get_version(head)

        new_tree = self._update(self.root, version.tree_index, ignores)
        if new_tree == version.tree_index:
            print("No changes detected!")
            return None

        new_index = self._indices.next_index(IndexKind.VERSION)
        text = message or f"Saved version with index {new_index}"
        self._dao.create_version(new_index, head, new_tree, text)
        self._dao.update_head(self.branch, new_index)
        print(text)
        return str(new_index)