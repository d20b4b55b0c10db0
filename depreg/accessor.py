"""
Dependencies accessor - the read surface returned by ``export()``.

Supports named lookup (item and attribute style), membership, key
enumeration and pair iteration over the registry's live store.
"""

from typing import TYPE_CHECKING, Any, Iterator, List, Tuple

from .errors import UnknownDependencyAttributeError, UnsupportedAccessError

if TYPE_CHECKING:
    from .core import DependencyRegistry


def is_meta_key(name: str) -> bool:
    """Dunder names belong to Python's object protocols, not to the registry."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class Dependencies:
    """
    Read-only view over a registry.

    Reads of lazy entries trigger their one-time resolution. Iteration
    (``entries()``, ``items()``, ``iter()``, ``dict()``) reads every entry and
    therefore resolves every pending lazy value.

    Attribute reads go through normal lookup first, so the accessor's own
    members (``get``, ``has``, ``keys``, ``entries``, ``items`` and the
    ``_registry`` slot) shadow dependencies of the same name. Use item
    access (``deps["keys"]``) for those. An unknown name read as an
    attribute raises UnknownDependencyAttributeError, which is also an
    AttributeError, so ``hasattr`` and ``getattr`` with a default work.

    Copies are the same object: the accessor is a view, and a registry has
    exactly one.

    Example:
        >>> registry.register_value("first", "John")
        >>> deps = registry.export()
        >>> deps.first, deps["first"], deps.get("first")
        ('John', 'John', 'John')
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: "DependencyRegistry"):
        object.__setattr__(self, "_registry", registry)

    # ── lookup ──

    def get(self, name: Any) -> Any:
        """
        Read a dependency by name.

        Raises:
            UnsupportedAccessError: Empty or non-string key
            UnknownDependencyError: Name is not registered
            LazyValueUndefinedError: Lazy resolver returned None
        """
        if not isinstance(name, str) or not name:
            raise UnsupportedAccessError(name)
        return self._registry._resolve(name)

    def __getitem__(self, name: Any) -> Any:
        return self.get(name)

    def __getattr__(self, name: str) -> Any:
        # Only called when normal attribute lookup fails.
        if is_meta_key(name):
            raise AttributeError(name)
        if name and not self.has(name):
            raise UnknownDependencyAttributeError(name)
        return self.get(name)

    # ── membership / enumeration ──

    def has(self, name: Any) -> bool:
        """True iff ``name`` is registered. Never resolves."""
        return isinstance(name, str) and name in self._registry._store

    def __contains__(self, name: Any) -> bool:
        return self.has(name)

    def keys(self) -> List[str]:
        """Registered names in registration order."""
        return self._registry._store.names()

    def entries(self) -> List[Tuple[str, Any]]:
        """(name, value) pairs; resolves pending lazy values."""
        return [(name, self.get(name)) for name in self.keys()]

    items = entries

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        for name in self.keys():
            yield name, self.get(name)

    def __len__(self) -> int:
        return len(self._registry._store)

    # ── read-only ──

    def __setattr__(self, name: str, value: Any) -> None:
        raise UnsupportedAccessError(name)

    def __delattr__(self, name: str) -> None:
        raise UnsupportedAccessError(name)

    def __setitem__(self, name: Any, value: Any) -> None:
        raise UnsupportedAccessError(name)

    def __delitem__(self, name: Any) -> None:
        raise UnsupportedAccessError(name)

    def __repr__(self) -> str:
        return f"<Dependencies {self.keys()!r}>"

    # ── copy / pickle ──

    def __copy__(self) -> "Dependencies":
        return self

    def __deepcopy__(self, memo: dict) -> "Dependencies":
        return self

    def __reduce__(self):
        return (Dependencies, (self._registry,))
