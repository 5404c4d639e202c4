"""Apply operations to the set of tasks held in a storage transaction."""

from __future__ import annotations

from collections.abc import Iterable

from taskledger.operations import (
    Create,
    Delete,
    Operation,
    SyncCreate,
    SyncDelete,
    SyncOp,
    SyncUpdate,
    UndoPoint,
    Update,
)
from taskledger.storage import DatabaseError, Transaction


def apply_operations(txn: Transaction, operations: Iterable[Operation]) -> None:
    """Apply operations to the tasks without recording them; nonsensical ones are ignored.

    The transaction is not committed.
    """
    for operation in operations:
        match operation:
            case Create(uuid=uuid):
                txn.create_task(uuid)
            case Delete(uuid=uuid):
                txn.delete_task(uuid)
            case Update(uuid=uuid, property=prop, value=value):
                task = txn.get_task(uuid)
                if task is not None:
                    if value is None:
                        task.pop(prop, None)
                    else:
                        task[prop] = value
                    txn.set_task(uuid, task)
            case UndoPoint():
                pass
            case _:
                raise TypeError(f"not an operation: {operation!r}")


def apply_op(txn: Transaction, op: SyncOp) -> None:
    """Apply one synchronized operation, raising DatabaseError if it does not fit."""
    match op:
        case SyncCreate(uuid=uuid):
            if not txn.create_task(uuid):
                raise DatabaseError(f"Task {uuid} already exists")
        case SyncDelete(uuid=uuid):
            if not txn.delete_task(uuid):
                raise DatabaseError(f"Task {uuid} does not exist")
        case SyncUpdate(uuid=uuid, property=prop, value=value):
            task = txn.get_task(uuid)
            if task is None:
                raise DatabaseError(f"Task {uuid} does not exist")
            if value is None:
                task.pop(prop, None)
            else:
                task[prop] = value
            txn.set_task(uuid, task)
        case _:
            raise TypeError(f"not a sync operation: {op!r}")