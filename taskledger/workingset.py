"""Snapshot of a replica's working set."""

from __future__ import annotations

import uuid as _uuid
from collections.abc import Iterable, Iterator


class WorkingSet:
    """A mapping from small, 1-based integers to the uuids of pending tasks.

    This is a snapshot: it does not follow later changes to the replica.
    """

    def __init__(self, by_index: Iterable[_uuid.UUID | None]) -> None:
        self._by_index: list[_uuid.UUID | None] = list(by_index)
        # Working sets are 1-indexed, so element 0 is always empty.
        if self._by_index and self._by_index[0] is not None:
            raise ValueError("working set index 0 must be empty")
        self._by_uuid: dict[_uuid.UUID, int] = {
            uuid: index for index, uuid in enumerate(self._by_index) if uuid is not None
        }

    def __len__(self) -> int:
        """The number of uuids in the set."""
        return sum(1 for uuid in self._by_index if uuid is not None)

    def largest_index(self) -> int:
        """The largest index in the set, or zero if the set is empty."""
        return max(len(self._by_index) - 1, 0)

    def is_empty(self) -> bool:
        """True if the set holds no uuids."""
        return all(uuid is None for uuid in self._by_index)

    def by_index(self, index: int) -> _uuid.UUID | None:
        """The uuid at the given index, if any."""
        if 0 <= index < len(self._by_index):
            return self._by_index[index]
        return None

    def by_uuid(self, uuid: _uuid.UUID) -> int | None:
        """The index of the given uuid, if any."""
        return self._by_uuid.get(uuid)

    def __iter__(self) -> Iterator[tuple[int, _uuid.UUID]]:
        """Yield (index, uuid) pairs in index order."""
        for index, uuid in enumerate(self._by_index):
            if uuid is not None:
                yield index, uuid