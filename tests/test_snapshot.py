import uuid
import zlib

import pytest

from taskledger.snapshot import (
    apply_snapshot,
    decode_snapshot,
    encode_snapshot,
    make_snapshot,
    serialize_tasks,
)
from taskledger.storage import DatabaseError, InMemoryStorage


def test_serialize_empty():
    assert serialize_tasks([]) == b"{}"


def test_serialize_tasks():
    u = uuid.uuid4()
    data = serialize_tasks([(u, {"description": "my task"})])
    assert data == f'{{"{u}":{{"description":"my task"}}}}'.encode()


def test_encode_decode_round_trip():
    u1, u2 = uuid.uuid4(), uuid.uuid4()
    tasks = [(u1, {"description": "one"}), (u2, {"description": "two", "x": "y"})]
    assert decode_snapshot(encode_snapshot(tasks)) == tasks


def test_encode_is_zlib():
    u = uuid.uuid4()
    encoded = encode_snapshot([(u, {"a": "b"})])
    assert zlib.decompress(encoded) == serialize_tasks([(u, {"a": "b"})])


def test_round_trip():
    storage = InMemoryStorage()
    version = uuid.uuid4()
    task1 = (uuid.uuid4(), {"description": "one"})
    task2 = (uuid.uuid4(), {"description": "two"})

    txn = storage.txn()
    txn.set_task(*task1)
    txn.set_task(*task2)
    txn.commit()

    snap = make_snapshot(storage.txn())

    storage = InMemoryStorage()
    txn = storage.txn()
    apply_snapshot(txn, version, snap)
    txn.commit()

    txn = storage.txn()
    assert txn.get_task(task1[0]) == task1[1]
    assert txn.get_task(task2[0]) == task2[1]
    assert len(txn.all_tasks()) == 2
    assert txn.base_version() == version
    assert len(txn.operations()) == 0
    assert len(txn.get_working_set()) == 1


def test_apply_to_non_empty_fails():
    storage = InMemoryStorage()
    txn = storage.txn()
    txn.set_task(uuid.uuid4(), {"a": "b"})
    txn.commit()
    snap = encode_snapshot([(uuid.uuid4(), {"c": "d"})])
    with pytest.raises(DatabaseError, match="non-empty"):
        apply_snapshot(storage.txn(), uuid.uuid4(), snap)


def test_decode_garbage_fails():
    with pytest.raises(DatabaseError):
        decode_snapshot(b"not compressed at all")


def test_decode_bad_uuid_fails():
    with pytest.raises(DatabaseError):
        decode_snapshot(zlib.compress(b'{"nope":{}}'))


def test_decode_non_string_value_fails():
    u = uuid.uuid4()
    with pytest.raises(DatabaseError):
        decode_snapshot(zlib.compress(f'{{"{u}":{{"a":1}}}}'.encode()))