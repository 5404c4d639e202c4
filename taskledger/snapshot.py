"""Compressed snapshots of the full set of tasks."""

from __future__ import annotations

import json
import uuid as _uuid
import zlib
from collections.abc import Iterable

from taskledger.operations import TaskMap
from taskledger.storage import DatabaseError, Transaction


def serialize_tasks(tasks: Iterable[tuple[_uuid.UUID, TaskMap]]) -> bytes:
    """Serialize (uuid, task) pairs as a compact JSON object keyed by uuid."""
    document = {str(uuid): dict(task) for uuid, task in tasks}
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def encode_snapshot(tasks: Iterable[tuple[_uuid.UUID, TaskMap]]) -> bytes:
    """Serialize and zlib-compress the given tasks."""
    return zlib.compress(serialize_tasks(tasks))


def _parse_task(value: object) -> TaskMap:
    if not isinstance(value, dict):
        raise DatabaseError("snapshot task is not a map")
    task: TaskMap = {}
    for prop, prop_value in value.items():
        if not isinstance(prop_value, str):
            raise DatabaseError(f"snapshot property {prop!r} is not a string")
        task[prop] = prop_value
    return task


def decode_snapshot(data: bytes) -> list[tuple[_uuid.UUID, TaskMap]]:
    """Decompress and parse a snapshot into (uuid, task) pairs, in stored order."""
    try:
        document = json.loads(zlib.decompress(data).decode("utf-8"))
    except (zlib.error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DatabaseError(f"invalid snapshot: {exc}") from exc
    if not isinstance(document, dict):
        raise DatabaseError("invalid snapshot: expected a map representing a task snapshot")
    tasks: list[tuple[_uuid.UUID, TaskMap]] = []
    for key, value in document.items():
        try:
            uuid = _uuid.UUID(key)
        except ValueError as exc:
            raise DatabaseError(f"invalid snapshot: bad uuid {key!r}") from exc
        tasks.append((uuid, _parse_task(value)))
    return tasks


def make_snapshot(txn: Transaction) -> bytes:
    """Produce a compressed, unencrypted snapshot of all tasks in the transaction."""
    return encode_snapshot(txn.all_tasks())


def apply_snapshot(txn: Transaction, version: _uuid.UUID, snapshot: bytes) -> None:
    """Load a snapshot into an empty task database and set its base version.

    The transaction is not committed.
    """
    tasks = decode_snapshot(snapshot)
    if not txn.is_empty():
        raise DatabaseError("Cannot apply snapshot to a non-empty task database")
    for uuid, task in tasks:
        txn.set_task(uuid, task)
    txn.set_base_version(version)