"""
Dependency registry - registration API, lazy resolution and import.

Typical assembly::

    registry = DependencyRegistry()
    registry.register_value("first", "John")
    registry.register_lazy("full", lambda deps: deps.first + " Doe")
    registry.register_factory("greeting", Greeting)

    deps = registry.export()
    deps.full                      # 'John Doe'
    deps.createGreeting("Doe")     # Greeting(deps, "Doe")
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .accessor import Dependencies
from .diagnostics import ConsoleDiagnosticListener, RegistryDiagnostics, RegistryEventType
from .entries import BoundFactory, EntryKind, FactoryEntry, LazyEntry, ValueEntry
from .errors import (
    ForeignRegistryTypeError,
    InvalidFactoryError,
    InvalidValueError,
    LazyValueUndefinedError,
    UnknownDependencyError,
)
from .naming import factory_name, instance_name, validate_name
from .store import EntryStore

if TYPE_CHECKING:
    from .config import RegistryConfig

logger = logging.getLogger("depreg.registry")

# Bare built-in constructors that are never valid factories.
INVALID_FACTORY_CLASSES = frozenset((
    object,
    type,
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
))


class DependencyRegistry:
    """
    Registry of named values, lazy values and factories.

    Entries are registered once and never overwritten. Consumers read them
    through the accessor returned by ``export()``.
    """

    __slots__ = ("_store", "_accessor", "_diagnostics")

    def __init__(self, diagnostics: Optional[RegistryDiagnostics] = None):
        self._store = EntryStore()
        self._accessor = Dependencies(self)
        self._diagnostics = diagnostics or RegistryDiagnostics()

    @classmethod
    def from_config(cls, config: "RegistryConfig") -> "DependencyRegistry":
        """
        Build a registry from configuration.

        Attaches a console diagnostic listener when ``config.diagnostics`` is
        set and bulk-registers ``config.values``.
        """
        registry = cls()
        if config.diagnostics:
            level = logging.getLevelName(config.log_level.upper())
            if not isinstance(level, int):
                level = logging.DEBUG
            registry.diagnostics.add_listener(ConsoleDiagnosticListener(log_level=level))
        if config.values:
            registry.register_bulk_values(config.values)
        return registry

    @property
    def diagnostics(self) -> RegistryDiagnostics:
        return self._diagnostics

    # ────────────────────────────────────────────────────────────────────
    # Registration
    # ────────────────────────────────────────────────────────────────────

    def register_value(self, name: str, value: Any) -> None:
        """
        Register a concrete value.

        Raises:
            InvalidNameError: Name is empty or not a string
            InvalidValueError: Value is None
            DuplicateRegistrationError: Name already registered
        """
        validate_name(name)
        if value is None:
            raise InvalidValueError(name)
        self._add(name, ValueEntry(value), "Value")

    register_named_instance = register_value

    def register_instance(self, instance: Any) -> str:
        """
        Register a value under its derived class name.

        ``HouseBuilder()`` is registered as ``houseBuilder``; a class is
        registered under its own name.

        Returns:
            The derived name
        """
        if instance is None:
            raise InvalidValueError("None")
        name = instance_name(instance)
        self.register_value(name, instance)
        return name

    def register_lazy(self, name: str, resolver: Callable[[Dependencies], Any]) -> None:
        """
        Register a lazy value.

        ``resolver`` is called with this registry's accessor on first read;
        its result replaces the entry. It is not invoked here.
        """
        validate_name(name)
        if resolver is None:
            raise InvalidValueError(name, "Lazy resolver cannot be None")
        if not callable(resolver):
            raise InvalidValueError(name, "Lazy resolver is not callable")
        self._add(name, LazyEntry(resolver), "Lazy value")

    def register_factory(
        self,
        base: Union[str, type],
        implementation: Optional[Callable[..., Any]] = None,
    ) -> str:
        """
        Register a factory under a derived name.

        Args:
            base: Base name, or a class whose lowercased-first name is used
            implementation: Constructor or function called as
                ``implementation(deps, *args, **kwargs)``. Defaults to ``base``
                when ``base`` is a class.

        Returns:
            The derived export name (``"greeting"`` -> ``"createGreeting"``)

        Raises:
            InvalidNameError: Base name is empty or not a string
            InvalidFactoryError: Implementation missing, not callable, or a
                bare built-in constructor
            DuplicateRegistrationError: Derived name already registered
        """
        if implementation is None and isinstance(base, type):
            implementation = base
        name = factory_name(base)

        if implementation is None:
            raise InvalidFactoryError(name, "Factory value cannot be None")
        if isinstance(implementation, type) and implementation in INVALID_FACTORY_CLASSES:
            raise InvalidFactoryError(implementation.__name__, "Invalid factory class")
        if not callable(implementation):
            raise InvalidFactoryError(name)

        self._add(name, FactoryEntry(BoundFactory(self, implementation, name)), "Factory")
        return name

    def register_bulk_values(self, values: Mapping[str, Any]) -> None:
        """
        Register every item of ``values`` in iteration order.

        The first failure propagates; items registered before it stay.
        """
        for name, value in values.items():
            self.register_value(name, value)

    def import_registry(self, other: "DependencyRegistry") -> None:
        """
        Copy every entry of ``other`` into this registry.

        Values are shared, pending lazy values become fresh pending entries
        resolved against this registry, and factories keep resolving against
        ``other``.

        Raises:
            ForeignRegistryTypeError: ``other`` is not a DependencyRegistry
            DuplicateRegistrationError: A name already exists here; entries
                copied before it stay
        """
        if not isinstance(other, DependencyRegistry):
            raise ForeignRegistryTypeError(other)

        count = 0
        for name, entry in other._store.items():
            self._store.add(name, entry.copy())
            count += 1

        logger.debug(f"Imported {count} entries into registry {id(self):#x}")
        self._diagnostics.emit(
            RegistryEventType.IMPORT,
            metadata={"source": f"{id(other):#x}", "count": count},
        )

    # ────────────────────────────────────────────────────────────────────
    # Read surface
    # ────────────────────────────────────────────────────────────────────

    def export(self) -> Dependencies:
        """Return the accessor over this registry."""
        return self._accessor

    def names(self) -> List[str]:
        return self._store.names()

    def kind_of(self, name: str) -> EntryKind:
        """Current entry kind of ``name`` (a resolved lazy value reports VALUE)."""
        entry = self._store.lookup(name)
        if entry is None:
            raise UnknownDependencyError(name)
        return entry.kind

    def describe(self) -> List[Tuple[str, str]]:
        """(name, kind) pairs without resolving anything."""
        return [(name, entry.kind.value) for name, entry in self._store.items()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"<DependencyRegistry entries={len(self._store)}>"

    # ────────────────────────────────────────────────────────────────────
    # Internals
    # ────────────────────────────────────────────────────────────────────

    def _add(self, name: str, entry: Any, kind: str) -> None:
        self._store.add(name, entry, kind)
        logger.debug(f"Registered {entry.kind.value} '{name}'")
        self._diagnostics.emit(
            RegistryEventType.REGISTRATION,
            name=name,
            kind=entry.kind.value,
        )

    def _resolve(self, name: str) -> Any:
        """Return the payload stored under ``name``, resolving lazy entries."""
        entry = self._store.lookup(name)
        if entry is None:
            raise UnknownDependencyError(name)
        if entry.kind is EntryKind.LAZY:
            return self._resolve_lazy(name, entry)
        return entry.value

    def _resolve_lazy(self, name: str, entry: LazyEntry) -> Any:
        with entry.lock:
            current = self._store.lookup(name)
            if current is not entry:
                # Resolved while waiting for the lock.
                return current.value

            with self._diagnostics.measure(name=name, kind=EntryKind.LAZY.value):
                value = entry.resolve(self._accessor)
                if value is None:
                    raise LazyValueUndefinedError(name)

            self._store.replace(name, ValueEntry(value))
            return value

    def _invoke_factory(
        self,
        factory: BoundFactory,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Any:
        self._diagnostics.emit(
            RegistryEventType.FACTORY_INVOCATION,
            name=factory.name,
            kind=EntryKind.FACTORY.value,
        )
        return factory.implementation(self._accessor, *args, **kwargs)
