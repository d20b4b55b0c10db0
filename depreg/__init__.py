"""
depreg - runtime dependency registry.

A composition root that decouples construction of objects from their use:
register named values, lazy values and factories, then read them through a
single accessor.

Key Features:
- Values, memoized lazy values and factories behind one accessor
- Deterministic factory naming ("greeting" -> "createGreeting")
- Attribute, item, membership and iteration access
- Registry import that keeps factories bound to their origin
- Diagnostics events and layered configuration
"""

__version__ = "0.1.0"

from .core import (
    DependencyRegistry,
    INVALID_FACTORY_CLASSES,
)

from .accessor import (
    Dependencies,
)

from .entries import (
    EntryKind,
    ValueEntry,
    LazyEntry,
    FactoryEntry,
    BoundFactory,
)

from .naming import (
    FACTORY_PREFIX,
    is_valid_name,
    validate_name,
    capitalize,
    uncapitalize,
    instance_name,
    factory_name,
)

from .validator import (
    DependencyValidator,
    require,
)

from .diagnostics import (
    RegistryDiagnostics,
    RegistryEvent,
    RegistryEventType,
    ConsoleDiagnosticListener,
)

from .config import (
    RegistryConfig,
    ConfigLoader,
)

from .errors import (
    RegistryError,
    InvalidNameError,
    InvalidValueError,
    InvalidFactoryError,
    DuplicateRegistrationError,
    UnknownDependencyError,
    UnknownDependencyAttributeError,
    UnsupportedAccessError,
    LazyValueUndefinedError,
    ForeignRegistryTypeError,
    MissingDependenciesError,
    ConfigError,
)

__all__ = [
    # Core
    "DependencyRegistry",
    "INVALID_FACTORY_CLASSES",
    "Dependencies",

    # Entries
    "EntryKind",
    "ValueEntry",
    "LazyEntry",
    "FactoryEntry",
    "BoundFactory",

    # Naming
    "FACTORY_PREFIX",
    "is_valid_name",
    "validate_name",
    "capitalize",
    "uncapitalize",
    "instance_name",
    "factory_name",

    # Validation
    "DependencyValidator",
    "require",

    # Diagnostics
    "RegistryDiagnostics",
    "RegistryEvent",
    "RegistryEventType",
    "ConsoleDiagnosticListener",

    # Config
    "RegistryConfig",
    "ConfigLoader",

    # Errors
    "RegistryError",
    "InvalidNameError",
    "InvalidValueError",
    "InvalidFactoryError",
    "DuplicateRegistrationError",
    "UnknownDependencyError",
    "UnknownDependencyAttributeError",
    "UnsupportedAccessError",
    "LazyValueUndefinedError",
    "ForeignRegistryTypeError",
    "MissingDependenciesError",
    "ConfigError",
]
