# jvc

jvc is a small version control tool that keeps snapshots of a working
directory. It stores everything it needs in a hidden `.jvc` directory at the
top of the repository: content-addressed blobs for files, numbered trees for
directories, and numbered versions that point to a tree and to their parent.

## Installing

```
pip install .
```

This installs the `jvc` command.

## Commands

Run every command from the top directory of the repository.

```
jvc init
```
Turns the current directory into a jvc repository.

```
jvc status
```
Shows the current version and lists files that are new, modified or deleted
since the last save.

```
jvc save
jvc save "a message describing the change"
```
Saves every change since the last save as a new version. The first save is
labelled "Initial save" unless a message is given. When nothing has changed,
no version is created.

```
jvc history
```
Shows the chain of versions from the first one up to the current one.

```
jvc revert 3
```
Restores the working directory to the version with index 3 and makes it the
current version. Reverting is refused while there are unsaved changes; run
`jvc save` first.

Running `jvc` with no command prints a short usage summary.

## Ignoring files

Put one file or directory name per line in a `.jvcIgnore` file at the top of
the repository. Entries are matched against names (not paths) at every level.
The `.jvc` directory is always ignored.

## Using it from Python

The pieces behind the commands are importable too:

```python
from pathlib import Path

from jvc.hashing import hash_bytes, hash_file
from jvc.repo_init import init_repository
from jvc.save import JvcSave
from jvc.status import JvcStatus
from jvc.history import JvcHistory

print(hash_bytes(b"hello"))      # 40 upper-case hex digits
init_repository(Path("."))
```

`JvcStatus.collect()` returns a `StatusReport` with the new, modified and
deleted paths, and `JvcHistory.versions()` returns the version indices from
the current one back to the first.

Note that the content hash used for blob names is jvc's own 160-bit digest;
it is not SHA-1 and its values are not interchangeable with other tools.