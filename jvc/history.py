"""Listing of the chain of versions leading to the current one."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jvc.objects import JvcDao, RepositoryError, StrPath


class JvcHistory:
    """Follows parent links from a branch head back to the first version."""

    def __init__(self, root: StrPath = ".", branch: str = "master") -> None:
        self.root = Path(root)
        self.branch = branch
        self._dao = JvcDao(self.root)

    def versions(self) -> list[str]:
        """Version indices from the first version to the current one."""
        chain: list[str] = []
        seen: set[str] = set()
        current = self._dao.get_head(self.branch)
        while current is not None:
            if current in seen:
                raise RepositoryError(f"version history loops back to version '{current}'")
            seen.add(current)
            chain.append(current)
            current = self._dao.get_version(current).parent_version
        chain.reverse()
        return chain

    def execute(self) -> str:
        """Print the version history and return the printed text."""
        history = self.versions()
        text = format_history(history)
        print(text)
        return text


def format_history(history: Sequence[str]) -> str:
    """Human-readable history, oldest first, with the current version marked."""
    body = f"{' --> '.join(history)} (current)" if history else ""
    return f"History up to current version:\n\t{body}"