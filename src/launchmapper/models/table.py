"""Mapping table: which action and colors each pad has."""

from collections.abc import Callable
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .color import ColorPair
from .mapping import Mapping, MappingEntry


class MappingTable(BaseModel):
    """
    Association of pad keys to mapping entries.

    Tables are values: every edit returns a new table and leaves the
    original untouched, so a consumer holding an old table never sees it
    change. Entries that an edit does not touch are shared with the new
    table rather than copied.

    Example:
        >>> table = MappingTable.empty().set_mapping(11, NoteMapping(target=60))
        >>> table.get(11).mapping.target
        60
    """

    model_config = ConfigDict(frozen=True)

    _entries: dict[int, MappingEntry] = PrivateAttr(default_factory=dict)

    @classmethod
    def empty(cls) -> "MappingTable":
        """Create a table with no mapped pads."""
        return cls()

    @classmethod
    def from_entries(cls, entries: dict[int, MappingEntry]) -> "MappingTable":
        """Build a table from validated entries (the dict is copied, entries are shared)."""
        table = cls()
        table._entries = dict(entries)
        return table

    @property
    def entries(self) -> MappingProxyType:
        """Read-only view of the entries by pad key."""
        return MappingProxyType(self._entries)

    def get(self, key: int) -> MappingEntry | None:
        """Get the entry for a pad, or None if the pad is unmapped."""
        return self._entries.get(key)

    def set_mapping(
        self, key: int, mapping: Mapping, color: ColorPair | None = None
    ) -> "MappingTable":
        """
        Return a table where only ``key`` has a new mapping.

        An existing entry keeps its colors unless ``color`` is given. A new
        entry gets ``color`` or the neutral pair.
        """
        current = self._entries.get(key)
        if color is None:
            color = current.color if current is not None else ColorPair.neutral()
        return self._replace(key, MappingEntry(mapping=mapping, color=color))

    def set_color(self, key: int, color: ColorPair) -> "MappingTable":
        """
        Return a table where only ``key`` has new colors.

        Raises:
            KeyError: If the pad is not mapped
        """
        current = self._entries.get(key)
        if current is None:
            raise KeyError(f"Pad {key} is not mapped")
        return self._replace(key, current.with_color(color))

    def remove(self, key: int) -> "MappingTable":
        """Return a table without ``key`` (unchanged if absent)."""
        if key not in self._entries:
            return self
        return MappingTable.from_entries({k: v for k, v in self._entries.items() if k != key})

    def keys(self) -> list[int]:
        """Mapped pad keys in ascending order."""
        return sorted(self._entries)

    def items(self) -> list[tuple[int, MappingEntry]]:
        """(key, entry) pairs in ascending key order."""
        return [(key, self._entries[key]) for key in self.keys()]

    def keys_where(self, predicate: Callable[[Mapping], bool]) -> list[int]:
        """Keys whose mapping satisfies ``predicate(mapping)``, ascending."""
        return [key for key, entry in self.items() if predicate(entry.mapping)]

    def _replace(self, key: int, entry: MappingEntry) -> "MappingTable":
        entries = dict(self._entries)
        entries[key] = entry
        return MappingTable.from_entries(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
