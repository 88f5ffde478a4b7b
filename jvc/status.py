"""Comparison of the working directory with the latest saved version."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from jvc.objects import JVC_DIR, EntryType, JvcDao, RepositoryError, StrPath


@dataclass
class StatusReport:
    """Paths, relative to the repository root, that changed since the last save."""

    new: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.new or self.modified or self.deleted)


class JvcStatus:
    """Works out which files are new, modified or deleted."""

    def __init__(self, root: StrPath = ".", branch: str = "master") -> None:
        self.root = Path(root)
        self.branch = branch
        self._dao = JvcDao(self.root)

    def _display(self, path: Path) -> str:
        return str(path.relative_to(self.root))

    @staticmethod
    def _children(directory: Path) -> list[Path]:
        return sorted(directory.iterdir(), key=lambda child: child.name)

    def _untracked(self, directory: Path, ignores: set[str]) -> Iterator[str]:
        for child in self._children(directory):
            if child.name in ignores:
                continue
            if child.is_dir():
                yield from self._untracked(child, ignores)
            else:
                yield self._display(child)

    def _compare(
        self, directory: Path, tree_name: str, ignores: set[str], report: StatusReport
    ) -> None:
        entries = self._dao.tree_entries(tree_name)
        children = self._children(directory)

        for child in children:
            if child.name in ignores:
                continue
            entry = entries.get(child.name)
            shown = self._display(child)
            if entry is None:
                report.new.append(shown)
            elif child.is_dir():
                if entry.type is EntryType.TREE:
                    self._compare(child, entry.code_name, ignores, report)
                else:
                    report.modified.append(shown)
            elif entry.type is EntryType.TREE or self._dao.differs(child, entry.code_name):
                report.modified.append(shown)

        present = {child.name for child in children}
        report.deleted.extend(
            self._display(directory / name) for name in entries if name not in present
        )

    def collect(self) -> StatusReport:
        """Compare the working directory with the branch's latest version."""
        ignores = self._dao.read_ignores()
        report = StatusReport()

        head_file = self.root / JVC_DIR / "head" / self.branch
        if not head_file.exists():
            report.new.extend(self._untracked(self.root, ignores))
            return report

        head = self._dao.get_head(self.branch)
        if head is None:
            raise RepositoryError(f"could not read head file of branch '{self.branch}'")
        version = self._dao.get_version(head)
        self._compare(self.root, version.tree_index, ignores, report)
        return report

    def unsaved_changes_exist(self) -> bool:
        """Whether anything changed since the last save."""
        return self.collect().has_changes

    def execute(self) -> None:
        """Print the current version and the changes since it was saved."""
        report = self.collect()
        print(format_report(report, self._dao.get_head(self.branch)))


def format_report(report: StatusReport, current_version: Optional[str]) -> str:
    """Human-readable status text."""
    if current_version is None:
        lines = ["Repository is new with no saved version."]
    else:
        lines = [f"Current version: Version '{current_version}'."]

    sections = (
        ("NEW files:", "new", report.new),
        ("MODIFIED files:", "modified", report.modified),
        ("DELETED files:", "deleted", report.deleted),
    )
    for heading, label, paths in sections:
        if paths:
            lines.append(heading)
            lines.extend(f"\t{label}: {path}" for path in paths)

    if not report.has_changes:
        lines.append("No changes detected since last save.")
    return "\n".join(lines)