"""Reference-counted activity tracking.

Several pads can map to the same logical id (a note, a fingering key).
The tracker counts how many holders keep each id active so that an id
turns off only when its last holder releases it.
"""

import logging
from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class ActivityTracker(Generic[K]):
    """
    Hold counts per id.

    Absent ids and ids with a count of zero are the same thing: an entry is
    removed as soon as its count reaches zero. Reading an absent id through
    ``tracker[id]`` gives 0.

    Example:
        >>> notes = ActivityTracker[int]()
        >>> notes.increment(60), notes.increment(60)
        (True, False)
        >>> notes.is_last_holder(60)
        False
        >>> notes.decrement(60), notes.decrement(60)
        (False, True)
        >>> notes.is_active(60)
        False
    """

    def __init__(self, name: str = "activity"):
        """
        Args:
            name: Label used in log messages
        """
        self._counts: dict[K, int] = {}
        self._name = name

    def increment(self, item: K) -> bool:
        """
        Add one holder.

        Returns:
            True if the id just became active
        """
        count = self._counts.get(item, 0) + 1
        self._counts[item] = count
        return count == 1

    def decrement(self, item: K) -> bool:
        """
        Remove one holder. Absent ids are left alone.

        Returns:
            True if the id just became inactive
        """
        count = self._counts.get(item)
        if count is None:
            logger.debug(f"{self._name}: release of inactive {item!r} ignored")
            return False
        if count == 1:
            del self._counts[item]
            return True
        self._counts[item] = count - 1
        return False

    def is_active(self, item: K) -> bool:
        """True if at least one holder keeps the id active."""
        return self._counts.get(item, 0) > 0

    def is_last_holder(self, item: K) -> bool:
        """True if the next decrement will deactivate the id."""
        return self._counts.get(item, 0) == 1

    def count(self, item: K) -> int:
        """Number of holders of the id (0 if inactive)."""
        return self._counts.get(item, 0)

    def held(self) -> set[K]:
        """Every active id."""
        return set(self._counts)

    def drain_all(self) -> list[K]:
        """
        Deactivate everything.

        Returns:
            The ids that were active, in activation order
        """
        drained = list(self._counts)
        self._counts.clear()
        if drained:
            logger.debug(f"{self._name}: drained {len(drained)} active id(s)")
        return drained

    def __getitem__(self, item: K) -> int:
        return self._counts.get(item, 0)

    def __contains__(self, item: object) -> bool:
        return item in self._counts

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    def items(self) -> list[tuple[K, int]]:
        """(id, count) pairs of active ids."""
        return list(self._counts.items())

    def __repr__(self) -> str:
        return f"ActivityTracker({self._name!r}, {self._counts!r})"
