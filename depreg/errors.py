"""
Registry error types.

Messages are stable and follow the ``<Kind>: '<name>'`` pattern so callers
and tests can match them literally.
"""

from typing import Any, Iterable, List, Optional


class RegistryError(Exception):
    """Base exception for registry errors."""

    def __init__(self, message: str, name: Any = None):
        self.name = name
        super().__init__(message)


class InvalidNameError(RegistryError, ValueError):
    """Registration name is empty or not a string."""

    def __init__(self, name: Any):
        super().__init__(f"Invalid name: '{name}'", name)


class InvalidValueError(RegistryError, ValueError):
    """Registered payload is absent or has the wrong shape."""

    def __init__(self, name: str, reason: str = "Value cannot be None"):
        self.reason = reason
        super().__init__(f"{reason}: '{name}'", name)


class InvalidFactoryError(RegistryError, TypeError):
    """Factory implementation is not callable or is a banned built-in."""

    def __init__(self, name: str, reason: str = "Invalid factory value"):
        self.reason = reason
        super().__init__(f"{reason}: '{name}'", name)


class DuplicateRegistrationError(RegistryError):
    """Name (or derived factory name) is already present."""

    def __init__(self, name: str, kind: str = "Dependency"):
        self.kind = kind
        super().__init__(f"{kind} is already registered: '{name}'", name)


class UnknownDependencyError(RegistryError, LookupError):
    """Lookup of a well-formed but unregistered name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown dependency: '{name}'", name)


class UnknownDependencyAttributeError(UnknownDependencyError, AttributeError):
    """Unknown name read as an attribute; keeps ``hasattr``/``getattr`` defaults working."""


class UnsupportedAccessError(RegistryError):
    """Accessor used with a key kind or action it does not support."""

    def __init__(self, key: Any):
        super().__init__(f"Unsupported action: '{key}'", key)


class LazyValueUndefinedError(RegistryError):
    """Lazy resolver returned None."""

    def __init__(self, name: str):
        super().__init__(f"Lazy value is None: '{name}'", name)


class ForeignRegistryTypeError(RegistryError, TypeError):
    """Import argument is not a DependencyRegistry."""

    def __init__(self, other: Any):
        self.other = other
        type_name = type(other).__name__
        super().__init__(
            f"You can only import DependencyRegistry instances: '{type_name}'",
            type_name,
        )


class MissingDependenciesError(RegistryError):
    """One or more required dependencies are missing."""

    def __init__(self, names: Iterable[str]):
        self.names: List[str] = list(names)
        noun = "dependencies" if len(self.names) > 1 else "dependency"
        joined = ", ".join(f"'{name}'" for name in self.names)
        super().__init__(f"Missing {noun}: {joined}", self.names)


class ConfigError(RegistryError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, key)
