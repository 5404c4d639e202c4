"""The task database behind a replica: storage, operations and their invariants."""

from __future__ import annotations

import uuid as _uuid
from collections.abc import Callable, Iterable

from taskledger.apply import apply_operations
from taskledger.operations import Create, Delete, Operation, TaskMap, Update, is_undo_point
from taskledger.rebuild import rebuild_working_set as _rebuild_working_set
from taskledger.storage import InMemoryStorage
from taskledger.undo import commit_reversed_operations as _commit_reversed_operations
from taskledger.undo import get_undo_operations as _get_undo_operations


class TaskDb:
    """Manages storage, local operations and the working set.

    The meaning of individual task properties is left to higher layers.
    """

    def __init__(self, storage: InMemoryStorage) -> None:
        self.storage = storage

    @classmethod
    def in_memory(cls) -> TaskDb:
        """A database backed by fresh in-memory storage."""
        return cls(InMemoryStorage())

    def commit_operations(
        self,
        operations: Iterable[Operation],
        add_to_working_set: Callable[[Operation], bool] | None = None,
    ) -> None:
        """Apply operations in one transaction and record them as local operations.

        Tasks named by operations for which ``add_to_working_set`` returns True are added
        to the working set, each at most once.
        """
        operations = list(operations)
        txn = self.storage.txn()
        apply_operations(txn, operations)

        to_add: list[_uuid.UUID] = []
        if add_to_working_set is not None:
            to_add = [
                op.uuid
                for op in operations
                if isinstance(op, (Create, Update, Delete)) and add_to_working_set(op)
            ]

        in_set = {uuid for uuid in txn.get_working_set() if uuid is not None}
        for uuid in to_add:
            if uuid not in in_set:
                txn.add_to_working_set(uuid)
                in_set.add(uuid)

        for op in operations:
            txn.add_operation(op)

        txn.commit()

    def all_tasks(self) -> list[tuple[_uuid.UUID, TaskMap]]:
        """All tasks, as (uuid, properties) pairs."""
        return self.storage.txn().all_tasks()

    def all_task_uuids(self) -> list[_uuid.UUID]:
        """The uuids of all tasks."""
        return self.storage.txn().all_task_uuids()

    def working_set(self) -> list[_uuid.UUID | None]:
        """The working set; index 0 is always None."""
        return self.storage.txn().get_working_set()

    def get_task(self, uuid: _uuid.UUID) -> TaskMap | None:
        """A single task's properties, or None if it does not exist."""
        return self.storage.txn().get_task(uuid)

    def get_task_operations(self, uuid: _uuid.UUID) -> list[Operation]:
        """The unsynchronized operations affecting the given task."""
        return self.storage.txn().get_task_operations(uuid)

    def rebuild_working_set(
        self, in_working_set: Callable[[TaskMap], bool], renumber: bool
    ) -> None:
        """Rebuild the working set in a single transaction."""
        _rebuild_working_set(self.storage.txn(), in_working_set, renumber)

    def get_undo_operations(self) -> list[Operation]:
        """Operations back to and including the last undo point, in applied order."""
        return _get_undo_operations(self.storage.txn())

    def commit_reversed_operations(self, undo_ops: Iterable[Operation]) -> bool:
        """Reverse the given operations, last first; False if they are not the latest local ones."""
        return _commit_reversed_operations(self.storage.txn(), undo_ops)

    def num_operations(self) -> int:
        """The number of unsynchronized operations, not counting undo points."""
        return sum(1 for op in self.storage.txn().operations() if not is_undo_point(op))

    def num_undo_points(self) -> int:
        """The number of unsynchronized undo points."""
        return sum(1 for op in self.storage.txn().operations() if is_undo_point(op))

    def sorted_tasks(self) -> list[tuple[_uuid.UUID, list[tuple[str, str]]]]:
        """All tasks with sorted properties, sorted by uuid."""
        return sorted((uuid, sorted(task.items())) for uuid, task in self.all_tasks())

    def operations(self) -> list[Operation]:
        """All unsynchronized operations, oldest first."""
        return self.storage.txn().operations()