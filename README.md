# taskledger

`taskledger` is a small task database built around a log of operations.
Every change to a task (creating it, setting or clearing a property,
deleting it) is an operation: it is applied to the stored tasks and kept in
the log of local operations. On top of that log it offers:

- **Working sets**: small integer indexes, starting at 1, for the tasks a
  user cares about right now, with optional renumbering to close gaps.
- **Undo**: the operations back to the most recent undo point can be fetched
  and reversed, as long as nothing else has been committed in between.
- **Snapshots**: the full set of tasks can be written as zlib-compressed JSON
  and loaded into an empty database.

Tasks are plain dictionaries mapping property names to string values and are
identified by `uuid.UUID`. There are no third-party dependencies.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Operations

`taskledger.operations` defines the operations as frozen dataclasses:

- `Create(uuid)`
- `Update(uuid, property, value, timestamp, old_value=None)`; a `value` of
  `None` removes the property
- `Delete(uuid, old_task={})`; `old_task` holds the properties needed to
  reverse the deletion
- `UndoPoint()`, a marker between groups of changes

and the forms used when applying reversed changes: `SyncCreate`,
`SyncDelete` and `SyncUpdate`. `is_undo_point(op)` tells undo points apart.

## Using the database

```python
import uuid
from datetime import datetime, timezone

from taskledger.operations import Create, Update, UndoPoint
from taskledger.taskdb import TaskDb

db = TaskDb.in_memory()
task_id = uuid.uuid4()
now = datetime.now(timezone.utc)

db.commit_operations(
    [
        Create(uuid=task_id),
        Update(uuid=task_id, property="description", value="write report",
               timestamp=now, old_value=None),
        Update(uuid=task_id, property="status", value="pending",
               timestamp=now, old_value=None),
    ],
    lambda op: isinstance(op, Create),
)

print(db.get_task(task_id))   # {'description': 'write report', 'status': 'pending'}
print(db.working_set())       # [None, UUID(...)]
print(db.num_operations())    # 3
```

`commit_operations` applies the operations and appends them to the log in
one transaction. Operations that make no sense in the current state (an
update to a missing task, a create for an existing one) change no task but
are still recorded. The optional second argument decides which operations
put their task into the working set; a task is never added twice.

Other queries: `all_tasks()`, `all_task_uuids()`, `get_task_operations(uuid)`,
`operations()`, `num_undo_points()` and `sorted_tasks()`, which returns every
task as `(uuid, sorted property pairs)`, sorted by uuid.

### Storage and transactions

`taskledger.storage.InMemoryStorage` keeps everything in memory.
`storage.txn()` returns a `Transaction` working on a private copy; its changes
become visible only when `commit()` is called. Using a transaction in a
`with` block does not commit it. Failures are raised as
`taskledger.storage.DatabaseError`.

`taskledger.apply.apply_operations(txn, ops)` applies operations to the tasks
without recording them, ignoring those that do not fit. `apply_op(txn, op)`
applies one `SyncCreate`/`SyncDelete`/`SyncUpdate` and raises
`DatabaseError` if the task already exists (create) or does not exist
(delete, update).

### Working sets

`TaskDb.working_set()` returns the raw list, whose first entry is always
`None`. Wrap it in `taskledger.workingset.WorkingSet` for lookups in both
directions:

```python
from taskledger.workingset import WorkingSet

ws = WorkingSet(db.working_set())
ws.by_index(1)        # the task's UUID
ws.by_uuid(task_id)   # 1
list(ws)              # [(1, UUID(...))]
len(ws), ws.largest_index(), ws.is_empty()
```

`TaskDb.rebuild_working_set(in_working_set, renumber)` drops entries whose
tasks no longer satisfy the predicate, appends qualifying tasks that are not
yet in the set, and either compacts the indexes (`renumber=True`) or leaves
gaps in place.

```python
db.rebuild_working_set(lambda task: task.get("status") == "pending", True)
```

### Undo

Commit an `UndoPoint` before a group of changes. Later,
`get_undo_operations()` returns everything from the last undo point onward
(or all logged operations if there is none), and
`commit_reversed_operations()` reverses them, last first, removing them from
the log. It returns `False` without changing anything when the list is empty
or is not exactly the most recent operations in the log.

```python
db.commit_operations([UndoPoint()], lambda op: False)
# ... more changes ...
undo_ops = db.get_undo_operations()
db.commit_reversed_operations(undo_ops)
```

### Snapshots

`taskledger.snapshot.make_snapshot(txn)` produces compressed bytes for all
tasks in a transaction; `apply_snapshot(txn, version, data)` loads them into
an empty transaction and sets its base version, without committing.
Applying to a non-empty database, or applying data that is not a valid
snapshot, raises `DatabaseError`.

```python
from taskledger.snapshot import apply_snapshot, make_snapshot
from taskledger.storage import InMemoryStorage

data = make_snapshot(db.storage.txn())
fresh = InMemoryStorage()
txn = fresh.txn()
apply_snapshot(txn, uuid.uuid4(), data)
txn.commit()
```

`serialize_tasks`, `encode_snapshot` and `decode_snapshot` work on lists of
`(uuid, task)` pairs directly.

### Keys

`taskledger.key.Key` is the 16-byte packed form of a UUID, ordered by its
bytes: `Key.from_uuid(u)`, `Key.from_bytes(b)` (exactly 16 bytes, otherwise
`ValueError`), `key.to_uuid()` and `bytes(key)`.

## Updating the minimum supported version

The `taskledger-msrv` command rewrites the minimum supported toolchain
version in a fixed set of files under the current directory
(`.github/workflows/checks.yml`, `.github/workflows/rust-tests.yml`,
`taskchampion/src/lib.rs`, `taskchampion/Cargo.toml`):

```
taskledger-msrv msrv 1.68
```

The version must consist of digits and dots only, and every listed file must
exist. Each file that is changed is reported; on error the message goes to
standard error and the exit status is 1. The same is available as
`taskledger.msrv.update_msrv(workspace_dir, version)`, which returns the
relative paths it rewrote.

## What it does not do

- Storage is in memory only; nothing is written to disk.
- There is no synchronization with a server. The base version and
  `sync_complete()` exist on transactions, but no code here talks to a
  server or merges remote changes.
- There is no task model on top of the property dictionaries (statuses,
  dates, tags); property names and values mean nothing to the database.