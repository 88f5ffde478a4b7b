"""Repository object storage: blobs, trees, versions, heads and index counters."""

from __future__ import annotations

import filecmp
import re
import shutil
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Union

from jvc.hashing import hash_file

StrPath = Union[str, "PathLike[str]"]

JVC_DIR = ".jvc"
IGNORE_FILE = ".jvcIgnore"
NULL = "NULL"

_VERSION_RE = re.compile(r"\s*(\S+)\s+(\S+)[\s\S]?([^\n]*)")
_ENTRY_RE = re.compile(r"\s*(\S+)\s+(\S+)[ \t]?(.*)")


class RepositoryError(Exception):
    """A repository object is missing or malformed."""


class VersionNotFoundError(RepositoryError):
    """The requested version object does not exist."""


class EntryType(Enum):
    BLOB = "BLOB"
    TREE = "TREE"


class IndexKind(Enum):
    VERSION = "version"
    TREE = "tree"


@dataclass(frozen=True)
class FileEntry:
    """One entry of a tree object: a blob or a sub-tree."""

    type: EntryType
    code_name: str


@dataclass(frozen=True)
class Version:
    """A saved version; ``parent_version`` is None for the first one."""

    version_index: str
    parent_version: Optional[str]
    tree_index: str
    message: str


def _object_dir(root: Path, kind: str) -> Path:
    return root / JVC_DIR / "obj" / kind


class IndexSupplier:
    """Hands out consecutive indices for versions and trees."""

    def __init__(self, root: StrPath = ".") -> None:
        self.root = Path(root)

    def next_index(self, kind: IndexKind) -> int:
        """Return the next free index of ``kind`` and advance the counter."""
        path = self.root / JVC_DIR / "idxSup" / kind.value
        try:
            index = int(path.read_text(encoding="utf-8").split()[0])
        except FileNotFoundError as exc:
            raise RepositoryError(f"index supplier '{kind.value}' does not exist") from exc
        except (IndexError, ValueError) as exc:
            raise RepositoryError(f"index supplier '{kind.value}' is corrupt") from exc
        path.write_text(str(index + 1), encoding="utf-8")
        return index


class BlobStore:
    """Content-addressed file copies and tree object files."""

    def __init__(self, root: StrPath = ".") -> None:
        self.root = Path(root)

    def create_blob(self, path: StrPath) -> str:
        """Store a copy of ``path`` under its content hash and return that name."""
        blob_name = hash_file(path)
        destination = _object_dir(self.root, "blob") / blob_name
        if not destination.exists():
            shutil.copyfile(path, destination)
        return blob_name

    def restore_file(self, blob_name: str, target: StrPath) -> None:
        """Write the content of a blob to ``target``, replacing what is there."""
        source = _object_dir(self.root, "blob") / blob_name
        if not source.is_file():
            raise RepositoryError(f"blob '{blob_name}' does not exist")
        shutil.copyfile(source, target)

    def write_tree(self, tree_name: Union[str, int], entries: Iterable[str]) -> None:
        """Write a tree object holding one entry line per item."""
        path = _object_dir(self.root, "tree") / str(tree_name)
        with open(path, "w", encoding="utf-8", newline="\n") as stream:
            for entry in entries:
                stream.write(f"{entry}\n")


class JvcDao:
    """Reads and writes heads, versions, trees and the ignore list."""

    def __init__(self, root: StrPath = ".") -> None:
        self.root = Path(root)

    def read_ignores(self) -> set[str]:
        """Names skipped when walking the working directory."""
        ignores = {JVC_DIR}
        ignore_file = self.root / IGNORE_FILE
        if ignore_file.exists():
            ignores.update(ignore_file.read_text(encoding="utf-8").splitlines())
        return ignores

    def differs(self, path: StrPath, blob_name: str) -> bool:
        """Whether a file's content differs from the stored blob."""
        file_path = Path(path)
        blob_path = _object_dir(self.root, "blob") / blob_name
        file_exists = file_path.is_file()
        blob_exists = blob_path.is_file()
        if not (file_exists and blob_exists):
            return file_exists != blob_exists
        if file_path.stat().st_size != blob_path.stat().st_size:
            return True
        return not filecmp.cmp(file_path, blob_path, shallow=False)

    def _head_path(self, branch: str) -> Path:
        return self.root / JVC_DIR / "head" / branch

    def init_head(self, branch: str, version_index: Union[str, int]) -> None:
        """Create the head file of a new branch."""
        path = self._head_path(branch)
        if path.exists():
            raise RepositoryError(f"head file for branch {branch} already exists")
        path.write_text(str(version_index), encoding="utf-8")

    def get_head(self, branch: str) -> Optional[str]:
        """Index of the branch's latest version, or None if it has none."""
        try:
            tokens = self._head_path(branch).read_text(encoding="utf-8").split()
        except FileNotFoundError:
            return None
        if not tokens or tokens[0] == NULL:
            return None
        return tokens[0]

    def update_head(self, branch: str, version_index: Union[str, int]) -> None:
        """Point the branch at another version."""
        self._head_path(branch).write_text(str(version_index), encoding="utf-8")

    def create_version(
        self,
        version_index: Union[str, int],
        parent: Optional[Union[str, int]],
        tree_index: Union[str, int],
        message: str,
    ) -> None:
        """Write a version object."""
        path = _object_dir(self.root, "version") / str(version_index)
        parent_text = NULL if parent is None else str(parent)
        with open(path, "w", encoding="utf-8", newline="\n") as stream:
            stream.write(f"{parent_text}\n{tree_index}\n{message}")

    def get_version(self, version_index: Union[str, int]) -> Version:
        """Read a version object."""
        index = str(version_index)
        path = _object_dir(self.root, "version") / index
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise VersionNotFoundError(
                f"could not open version object for version '{index}'. "
                "Version does NOT exist! Use 'jvc history' to look at version indices history."
            ) from exc
        match = _VERSION_RE.match(text)
        if match is None:
            raise RepositoryError(f"version object '{index}' is malformed")
        parent, tree_index, message = match.groups()
        return Version(
            version_index=index,
            parent_version=None if parent == NULL else parent,
            tree_index=tree_index,
            message=message,
        )

    def tree_entries(self, tree_name: Union[str, int]) -> dict[str, FileEntry]:
        """Entries of a tree object keyed by name, in name order."""
        path = _object_dir(self.root, "tree") / str(tree_name)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise RepositoryError(f"could not open tree {tree_name}") from exc
        entries: dict[str, FileEntry] = {}
        for line in text.splitlines():
            if not line.strip():
                continue
            match = _ENTRY_RE.match(line)
            if match is None:
                raise RepositoryError(f"malformed entry in tree {tree_name}: {line!r}")
            type_name, code_name, name = match.groups()
            try:
                entry_type = EntryType(type_name)
            except ValueError as exc:
                raise RepositoryError(f"unknown entry type {type_name!r} in tree {tree_name}") from exc
            entries.setdefault(name, FileEntry(entry_type, code_name))
        return dict(sorted(entries.items()))


def copy_file_name(file_name: str) -> str:
    """Name for a restored copy: ``_re`` inserted before the last extension."""
    period = max(file_name.rfind("."), 0)
    return f"{file_name[:period]}_re{file_name[period:]}"