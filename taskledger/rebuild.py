"""Rebuilding a replica's working set."""

from __future__ import annotations

import uuid as _uuid
from collections.abc import Callable

from taskledger.operations import TaskMap
from taskledger.storage import Transaction


def rebuild_working_set(
    txn: Transaction, in_working_set: Callable[[TaskMap], bool], renumber: bool
) -> None:
    """Rebuild the working set from a predicate saying which tasks belong in it.

    Existing entries that no longer qualify are dropped; with ``renumber`` the remaining
    entries are compacted toward index 1, otherwise they keep their indexes. Qualifying
    tasks not yet in the set are appended. The transaction is committed.
    """
    kept: list[_uuid.UUID | None] = []
    seen: set[_uuid.UUID] = set()

    for uuid in txn.get_working_set()[1:]:
        if uuid is not None:
            task = txn.get_task(uuid)
            if task is not None and in_working_set(task):
                kept.append(uuid)
                seen.add(uuid)
                continue
        if not renumber:
            kept.append(None)

    if renumber:
        txn.clear_working_set()
        for uuid in kept:
            if uuid is not None:
                txn.add_to_working_set(uuid)
    else:
        for index, uuid in enumerate(kept, start=1):
            if uuid is None:
                txn.set_working_set_item(index, None)

    for uuid, task in txn.all_tasks():
        if uuid not in seen and in_working_set(task):
            txn.add_to_working_set(uuid)

    txn.commit()