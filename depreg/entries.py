"""
Entry variants held by the entry store.

An entry is one of:
- ValueEntry: a concrete payload
- LazyEntry: a pending resolver, replaced by a ValueEntry on first read
- FactoryEntry: a BoundFactory producing a new payload per call
"""

from enum import Enum
import threading
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .accessor import Dependencies
    from .core import DependencyRegistry


class EntryKind(str, Enum):
    """Entry variant tags."""
    VALUE = "value"
    LAZY = "lazy"
    FACTORY = "factory"


class ValueEntry:
    """Already-computed payload."""

    __slots__ = ("_value",)

    kind = EntryKind.VALUE

    def __init__(self, value: Any):
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def copy(self) -> "ValueEntry":
        # Values are immutable once stored.
        return self

    def __repr__(self) -> str:
        return f"ValueEntry({self._value!r})"


class LazyEntry:
    """
    Pending lazy value.

    The resolver receives the owning registry's accessor. The lock guards the
    pending -> resolved transition performed by the registry.
    """

    __slots__ = ("_resolver", "lock")

    kind = EntryKind.LAZY

    def __init__(self, resolver: Callable[["Dependencies"], Any]):
        self._resolver = resolver
        self.lock = threading.RLock()

    def resolve(self, dependencies: "Dependencies") -> Any:
        """Run the resolver. Memoization is the registry's job."""
        return self._resolver(dependencies)

    def copy(self) -> "LazyEntry":
        """Fresh pending entry with its own state."""
        return LazyEntry(self._resolver)

    def __repr__(self) -> str:
        return f"LazyEntry({self._resolver!r})"


class BoundFactory:
    """
    Factory implementation bound to the registry that registered it.

    Calling it passes the owner's accessor as the implicit first argument,
    followed by the caller's arguments. Copies made by import keep the
    original owner.
    """

    __slots__ = ("_owner", "_implementation", "_name")

    def __init__(
        self,
        owner: "DependencyRegistry",
        implementation: Callable[..., Any],
        name: str,
    ):
        self._owner = owner
        self._implementation = implementation
        self._name = name

    @property
    def owner(self) -> "DependencyRegistry":
        return self._owner

    @property
    def implementation(self) -> Callable[..., Any]:
        return self._implementation

    @property
    def name(self) -> str:
        return self._name

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._owner._invoke_factory(self, args, kwargs)

    def __repr__(self) -> str:
        impl = getattr(self._implementation, "__qualname__", repr(self._implementation))
        return f"<BoundFactory {self._name} -> {impl}>"


class FactoryEntry:
    """Store slot holding a BoundFactory."""

    __slots__ = ("_factory",)

    kind = EntryKind.FACTORY

    def __init__(self, factory: BoundFactory):
        self._factory = factory

    @property
    def value(self) -> BoundFactory:
        return self._factory

    def copy(self) -> "FactoryEntry":
        # Keeps the original (owner, implementation) binding.
        return FactoryEntry(self._factory)

    def __repr__(self) -> str:
        return f"FactoryEntry({self._factory!r})"
