"""Compact, orderable keys derived from task UUIDs."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass

_KEY_LENGTH = 16


@dataclass(frozen=True, order=True)
class Key:
    """The 16-byte packed form of a UUID, usable as a sortable storage key."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != _KEY_LENGTH:
            raise ValueError(f"expected {_KEY_LENGTH} bytes, got {len(self.data)}")

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Key:
        """Build a key from exactly 16 bytes."""
        return cls(bytes(data))

    @classmethod
    def from_uuid(cls, uuid: _uuid.UUID) -> Key:
        """Build a key from a UUID."""
        return cls(uuid.bytes)

    def to_uuid(self) -> _uuid.UUID:
        """Return the UUID this key represents."""
        return _uuid.UUID(bytes=self.data)

    def __bytes__(self) -> bytes:
        return self.data