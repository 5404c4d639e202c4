"""Undo of local, not yet synchronized operations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from taskledger.apply import apply_op
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
    is_undo_point,
)
from taskledger.storage import Transaction

log = logging.getLogger(__name__)


def get_undo_operations(txn: Transaction) -> list[Operation]:
    """Operations back to and including the last undo point, or all local ones if there is none.

    They are returned in the order they were applied.
    """
    local_ops = txn.operations()
    last_undo = next(
        (i for i in reversed(range(len(local_ops))) if is_undo_point(local_ops[i])),
        None,
    )
    return local_ops if last_undo is None else local_ops[last_undo:]


def reverse_ops(op: Operation) -> list[SyncOp]:
    """The sync operations that reverse the effect of ``op``."""
    match op:
        case Create(uuid=uuid):
            return [SyncDelete(uuid)]
        case Delete(uuid=uuid, old_task=old_task):
            # The original timestamps are unknown; these ops are applied and discarded.
            timestamp = datetime.now(timezone.utc)
            return [SyncCreate(uuid)] + [
                SyncUpdate(uuid, prop, value, timestamp) for prop, value in old_task.items()
            ]
        case Update(uuid=uuid, property=prop, old_value=old_value, timestamp=timestamp):
            return [SyncUpdate(uuid, prop, old_value, timestamp)]
        case UndoPoint():
            return []
        case _:
            raise TypeError(f"not an operation: {op!r}")


def commit_reversed_operations(txn: Transaction, undo_ops: Iterable[Operation]) -> bool:
    """Reverse the given operations, last first, and commit.

    Returns False without changing anything unless the operations exactly match the most
    recent local operations.
    """
    undo_ops = list(undo_ops)
    if not undo_ops:
        return False

    local_ops = txn.operations()
    if len(undo_ops) > len(local_ops) or local_ops[len(local_ops) - len(undo_ops):] != undo_ops:
        log.info("Undo failed: concurrent changes to the database occurred.")
        log.debug("local_ops=%r undo_ops=%r", local_ops, undo_ops)
        return False

    applied = False
    for op in reversed(undo_ops):
        log.debug("Reversing operation %r", op)
        for rev in reverse_ops(op):
            log.debug("Applying reversed operation %r", rev)
            apply_op(txn, rev)
            applied = True
        txn.remove_operation(op)

    txn.commit()
    return applied