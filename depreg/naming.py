"""
Name validation and derivation.

Pure functions: nothing here touches a registry.
"""

from typing import Any

from .errors import InvalidNameError

FACTORY_PREFIX = "create"


def is_valid_name(name: Any) -> bool:
    """A name is valid iff it is a non-empty ``str``."""
    return isinstance(name, str) and name != ""


def validate_name(name: Any) -> str:
    """Return ``name`` unchanged or raise InvalidNameError."""
    if not is_valid_name(name):
        raise InvalidNameError(name)
    return name


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def uncapitalize(name: str) -> str:
    return name[:1].lower() + name[1:]


def instance_name(obj: Any) -> str:
    """
    Derive a dependency name from a class or instance.

    ``HouseBuilder`` and ``HouseBuilder()`` both map to ``"houseBuilder"``.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return uncapitalize(cls.__name__)


def factory_name(base: Any) -> str:
    """
    Derive the export name of a factory.

    Args:
        base: Base name or class

    Returns:
        ``"create"`` followed by the capitalized base, e.g. ``"createGreeting"``
    """
    if isinstance(base, type):
        base = instance_name(base)
    validate_name(base)
    return FACTORY_PREFIX + capitalize(base)
