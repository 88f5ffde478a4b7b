"""Creation of the on-disk layout of a new repository."""

from __future__ import annotations

from pathlib import Path

from jvc.objects import JVC_DIR, IndexKind, RepositoryError, StrPath


class AlreadyRepositoryError(RepositoryError):
    """The directory already holds a repository."""


def init_repository(root: StrPath = ".") -> Path:
    """Create the repository directory under ``root`` and return its path."""
    repo = Path(root) / JVC_DIR
    if repo.exists():
        raise AlreadyRepositoryError("Already a repository")

    repo.mkdir()

    suppliers = repo / "idxSup"
    suppliers.mkdir()
    for kind in IndexKind:
        (suppliers / kind.value).write_text("0", encoding="utf-8")

    (repo / "head").mkdir()

    objects = repo / "obj"
    objects.mkdir()
    for kind in ("version", "tree", "blob"):
        (objects / kind).mkdir()

    return repo