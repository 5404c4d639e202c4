"""Operations recorded against a task database, and their synchronizable forms."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

TaskMap = dict[str, str]


@dataclass(frozen=True)
class Create:
    """Create a new task with the given uuid."""

    uuid: _uuid.UUID


@dataclass(frozen=True)
class Delete:
    """Delete a task, remembering its properties so the deletion can be reversed."""

    uuid: _uuid.UUID
    old_task: TaskMap = field(default_factory=dict)


@dataclass(frozen=True)
class Update:
    """Set or remove (value None) one property of a task."""

    uuid: _uuid.UUID
    property: str
    value: str | None
    timestamp: datetime
    old_value: str | None = None


@dataclass(frozen=True)
class UndoPoint:
    """A marker separating groups of operations for undo."""


@dataclass(frozen=True)
class SyncCreate:
    """Create a task; the form exchanged with a sync server."""

    uuid: _uuid.UUID


@dataclass(frozen=True)
class SyncDelete:
    """Delete a task; the form exchanged with a sync server."""

    uuid: _uuid.UUID


@dataclass(frozen=True)
class SyncUpdate:
    """Set or remove (value None) a task property; the form exchanged with a sync server."""

    uuid: _uuid.UUID
    property: str
    value: str | None
    timestamp: datetime


Operation = Union[Create, Delete, Update, UndoPoint]
SyncOp = Union[SyncCreate, SyncDelete, SyncUpdate]


def is_undo_point(op: object) -> bool:
    """True if the operation is an undo point."""
    return isinstance(op, UndoPoint)