import uuid
from datetime import datetime, timezone

from taskledger.apply import apply_operations
from taskledger.operations import (
    Create,
    Delete,
    SyncCreate,
    SyncDelete,
    SyncUpdate,
    UndoPoint,
    Update,
)
from taskledger.storage import InMemoryStorage
from taskledger.undo import commit_reversed_operations, get_undo_operations, reverse_ops


def _commit(storage, ops):
    txn = storage.txn()
    apply_operations(txn, ops)
    for op in ops:
        txn.add_operation(op)
    txn.commit()


def _sorted_tasks(storage):
    return sorted((u, sorted(t.items())) for u, t in storage.txn().all_tasks())


def test_apply_create():
    storage = InMemoryStorage()
    uuid1, uuid2 = uuid.uuid4(), uuid.uuid4()
    timestamp = datetime.now(timezone.utc)

    _commit(
        storage,
        [
            Create(uuid1),
            Update(uuid1, "prop", "v1", timestamp, None),
            Create(uuid2),
            Update(uuid2, "prop", "v2", timestamp, None),
            Update(uuid2, "prop2", "v3", timestamp, "v2"),
        ],
    )
    db_state = _sorted_tasks(storage)

    _commit(
        storage,
        [
            UndoPoint(),
            Delete(uuid1, {"prop": "v1"}),
            Update(uuid2, "prop", None, timestamp, "v2"),
            Update(uuid2, "prop2", "new-value", timestamp, "v3"),
        ],
    )
    assert len(storage.txn().operations()) == 9

    undo_ops = get_undo_operations(storage.txn())
    assert len(undo_ops) == 4
    assert undo_ops == storage.txn().operations()[5:]

    # the wrong set of ops is refused
    assert not commit_reversed_operations(storage.txn(), undo_ops[1:3])

    assert commit_reversed_operations(storage.txn(), undo_ops)
    assert len(storage.txn().operations()) == 5
    assert _sorted_tasks(storage) == db_state

    undo_ops = get_undo_operations(storage.txn())
    assert len(undo_ops) == 5
    assert commit_reversed_operations(storage.txn(), undo_ops)

    assert storage.txn().operations() == []
    assert _sorted_tasks(storage) == []

    undo_ops = get_undo_operations(storage.txn())
    assert undo_ops == []
    assert not commit_reversed_operations(storage.txn(), undo_ops)


def test_reverse_create():
    u = uuid.uuid4()
    assert reverse_ops(Create(u)) == [SyncDelete(u)]


def test_reverse_delete():
    u = uuid.uuid4()
    reversed_ops = reverse_ops(Delete(u, {"prop1": "v1"}))
    assert len(reversed_ops) == 2
    assert reversed_ops[0] == SyncCreate(u)
    second = reversed_ops[1]
    assert isinstance(second, SyncUpdate)
    assert (second.uuid, second.property, second.value) == (u, "prop1", "v1")


def test_reverse_update():
    u = uuid.uuid4()
    timestamp = datetime.now(timezone.utc)
    assert reverse_ops(Update(u, "prop", "v", timestamp, "foo")) == [
        SyncUpdate(u, "prop", "foo", timestamp)
    ]


def test_reverse_undo_point():
    assert reverse_ops(UndoPoint()) == []


def test_get_undo_operations_uses_last_undo_point():
    storage = InMemoryStorage()
    u = uuid.uuid4()
    ops = [UndoPoint(), Create(u), UndoPoint(), Delete(u, {})]
    _commit(storage, ops)
    assert get_undo_operations(storage.txn()) == ops[2:]