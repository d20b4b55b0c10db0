"""
Ordered entry store.

Maps dependency names to entries in registration order and enforces name
uniqueness. The only in-place mutation is replace(), used when a lazy entry
resolves.
"""

from typing import Dict, List, Optional, Tuple, Union

from .entries import FactoryEntry, LazyEntry, ValueEntry
from .errors import DuplicateRegistrationError

Entry = Union[ValueEntry, LazyEntry, FactoryEntry]


class EntryStore:
    """Insertion-ordered name -> entry mapping."""

    __slots__ = ("_entries",)

    def __init__(self):
        self._entries: Dict[str, Entry] = {}

    def add(self, name: str, entry: Entry, kind: str = "Dependency") -> None:
        """
        Insert a new entry.

        Args:
            name: Dependency name (already validated)
            entry: Entry to store
            kind: Label used in the duplicate error message

        Raises:
            DuplicateRegistrationError: If ``name`` is already present
        """
        if name in self._entries:
            raise DuplicateRegistrationError(name, kind)
        self._entries[name] = entry

    def replace(self, name: str, entry: Entry) -> None:
        """Overwrite an existing slot (lazy resolution only)."""
        if name not in self._entries:
            raise KeyError(name)
        self._entries[name] = entry

    def lookup(self, name: str) -> Optional[Entry]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return list(self._entries)

    def items(self) -> List[Tuple[str, Entry]]:
        """Snapshot of (name, entry) pairs."""
        return list(self._entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
