import uuid
from datetime import datetime, timezone

import pytest

from taskledger.operations import (
    Create,
    Delete,
    SyncCreate,
    SyncDelete,
    SyncUpdate,
    UndoPoint,
    Update,
    is_undo_point,
)

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_is_undo_point_true_only_for_undo_point():
    u = uuid.uuid4()
    assert is_undo_point(UndoPoint()) is True
    assert is_undo_point(Create(u)) is False
    assert is_undo_point(Delete(u)) is False
    assert is_undo_point(Update(u, "title", "x", NOW)) is False
    assert is_undo_point(SyncCreate(u)) is False


def test_equality_by_value():
    u = uuid.uuid4()
    assert Create(u) == Create(u)
    assert Update(u, "p", "v", NOW, "old") == Update(u, "p", "v", NOW, "old")
    assert Update(u, "p", "v", NOW, "old") != Update(u, "p", "v", NOW, None)
    assert UndoPoint() == UndoPoint()


def test_operation_and_sync_op_differ():
    u = uuid.uuid4()
    assert Create(u) != SyncCreate(u)
    assert Delete(u) != SyncDelete(u)


def test_delete_default_old_task_is_empty_and_not_shared():
    u = uuid.uuid4()
    a = Delete(u)
    b = Delete(u)
    assert a.old_task == {}
    assert a.old_task is not b.old_task


def test_update_old_value_defaults_to_none():
    u = uuid.uuid4()
    op = Update(u, "title", "my task", NOW)
    assert op.old_value is None
    assert op.value == "my task"


def test_operations_are_immutable():
    op = Create(uuid.uuid4())
    with pytest.raises(AttributeError):
        op.uuid = uuid.uuid4()  # type: ignore[misc]


def test_sync_update_fields():
    u = uuid.uuid4()
    op = SyncUpdate(u, "priority", None, NOW)
    assert (op.uuid, op.property, op.value, op.timestamp) == (u, "priority", None, NOW)