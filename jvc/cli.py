"""Command-line entry point dispatching to the repository commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from jvc.history import JvcHistory
from jvc.objects import JVC_DIR, RepositoryError
from jvc.repo_init import init_repository
from jvc.revert import JvcRevert
from jvc.save import JvcSave
from jvc.status import JvcStatus

USAGE = "\n".join(
    [
        "Usage: jvc <command> <optional-or-required-parameter>",
        "There are 5 simple commands:",
        "\tinit: Initialize a folder as a jvc repository.",
        "\tstatus: Show all changes to the current repository since last save.",
        "\tsave: Save all changes to the current repository since last save.",
        "\t\t<optional-parameter>: the optional parameter is the message associated with the save.",
        "\thistory: See the version history from the initial version (index 0) up to the current version.",
        "\trevert: Revert back to the version with index specified in the parameter.",
        "\t\t<required-parameter>: The parameter is the index of the version that the repo is to be reverted to.",
    ]
)

SAVE_USAGE = (
    "Usage: jvc save <optional-message>. "
    "The optional message is a string wrapped inside double quotes."
)
REVERT_USAGE = (
    "Usage: jvc revert <version-index>. Use 'jvc history' to look up version indices."
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


class _UsageError(Exception):
    """The command was given the wrong arguments."""


def _require_repository(root: Path) -> None:
    if not (root / JVC_DIR).exists():
        raise RepositoryError("Not a jvc repository")


def _init(root: Path, args: Sequence[str]) -> None:
    init_repository(root)
    print("Initialized current directory as a jvc repository.")


def _status(root: Path, args: Sequence[str]) -> None:
    _require_repository(root)
    JvcStatus(root).execute()


def _save(root: Path, args: Sequence[str]) -> None:
    _require_repository(root)
    if len(args) > 1:
        raise _UsageError(SAVE_USAGE)
    JvcSave(root).execute(args[0] if args else "")


def _revert(root: Path, args: Sequence[str]) -> None:
    _require_repository(root)
    if not args:
        raise _UsageError(REVERT_USAGE)
    JvcRevert(root).execute(args[0])


def _history(root: Path, args: Sequence[str]) -> None:
    _require_repository(root)
    JvcHistory(root).execute()


_COMMANDS: dict[str, Callable[[Path, Sequence[str]], None]] = {
    "init": _init,
    "status": _status,
    "save": _save,
    "revert": _revert,
    "history": _history,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one command on the repository in the current directory."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE)
        return EXIT_OK

    command, rest = args[0], args[1:]
    handler = _COMMANDS.get(command)
    if handler is None:
        print(f"Error: Command '{command}' does not exist!", file=sys.stderr)
        return EXIT_USAGE

    try:
        handler(Path("."), rest)
    except _UsageError as exc:
        print(exc, file=sys.stderr)
        return EXIT_USAGE
    except RepositoryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())