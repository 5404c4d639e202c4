"""In-memory task storage with transactional access."""

from __future__ import annotations

import copy
import uuid as _uuid
from dataclasses import dataclass, field

from taskledger.operations import Create, Delete, Operation, TaskMap, Update

NIL_VERSION = _uuid.UUID(int=0)


class DatabaseError(Exception):
    """An operation could not be carried out against the task database."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Task Database Error: {message}")
        self.message = message


@dataclass
class _Data:
    tasks: dict[_uuid.UUID, TaskMap] = field(default_factory=dict)
    base_version: _uuid.UUID = NIL_VERSION
    operations: list[Operation] = field(default_factory=list)
    working_set: list[_uuid.UUID | None] = field(default_factory=lambda: [None])


class InMemoryStorage:
    """Storage that keeps all data in memory."""

    def __init__(self) -> None:
        self._data = _Data()

    def txn(self) -> Transaction:
        """Begin a transaction; its changes are kept only if it is committed."""
        return Transaction(self)


class Transaction:
    """A view of the storage whose changes become visible on commit."""

    def __init__(self, storage: InMemoryStorage) -> None:
        self._storage = storage
        self._data = copy.deepcopy(storage._data)

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False

    def get_task(self, uuid: _uuid.UUID) -> TaskMap | None:
        """A copy of the task's properties, or None if it does not exist."""
        task = self._data.tasks.get(uuid)
        return dict(task) if task is not None else None

    def create_task(self, uuid: _uuid.UUID) -> bool:
        """Create an empty task; False if it already exists."""
        if uuid in self._data.tasks:
            return False
        self._data.tasks[uuid] = {}
        return True

    def set_task(self, uuid: _uuid.UUID, task: TaskMap) -> None:
        """Create or replace a task."""
        self._data.tasks[uuid] = dict(task)

    def delete_task(self, uuid: _uuid.UUID) -> bool:
        """Delete a task; False if it did not exist."""
        return self._data.tasks.pop(uuid, None) is not None

    def all_tasks(self) -> list[tuple[_uuid.UUID, TaskMap]]:
        """All tasks, as (uuid, properties) pairs."""
        return [(uuid, dict(task)) for uuid, task in self._data.tasks.items()]

    def all_task_uuids(self) -> list[_uuid.UUID]:
        """The uuids of all tasks."""
        return list(self._data.tasks)

    def base_version(self) -> _uuid.UUID:
        """The latest version received from or sent to a server."""
        return self._data.base_version

    def set_base_version(self, version: _uuid.UUID) -> None:
        self._data.base_version = version

    def operations(self) -> list[Operation]:
        """The operations not yet synchronized, oldest first."""
        return list(self._data.operations)

    def get_task_operations(self, uuid: _uuid.UUID) -> list[Operation]:
        """The unsynchronized operations that affect the given task."""
        return [
            op
            for op in self._data.operations
            if isinstance(op, (Create, Delete, Update)) and op.uuid == uuid
        ]

    def add_operation(self, op: Operation) -> None:
        self._data.operations.append(op)

    def remove_operation(self, op: Operation) -> None:
        """Remove the most recent operation, which must equal ``op``."""
        if not self._data.operations or self._data.operations[-1] != op:
            raise DatabaseError("Last operation does not match -- cannot remove")
        self._data.operations.pop()

    def get_working_set(self) -> list[_uuid.UUID | None]:
        """The working set; index 0 is always None."""
        return list(self._data.working_set)

    def add_to_working_set(self, uuid: _uuid.UUID) -> int:
        """Append a uuid to the working set and return its index."""
        self._data.working_set.append(uuid)
        return len(self._data.working_set) - 1

    def set_working_set_item(self, index: int, uuid: _uuid.UUID | None) -> None:
        """Replace the entry at an existing index."""
        if index < 1 or index >= len(self._data.working_set):
            raise DatabaseError(f"Index {index} is not in the working set")
        self._data.working_set[index] = uuid

    def clear_working_set(self) -> None:
        self._data.working_set = [None]

    def is_empty(self) -> bool:
        """True if there are no tasks, no operations and no base version."""
        return (
            not self._data.tasks
            and not self._data.operations
            and self._data.base_version == NIL_VERSION
        )

    def sync_complete(self) -> None:
        """Record that all local operations have been synchronized."""
        self._data.operations.clear()

    def commit(self) -> None:
        """Make this transaction's changes visible to later transactions."""
        self._storage._data = copy.deepcopy(self._data)