"""
Dependency validator - fail fast when required dependencies are missing.
"""

from typing import Any

from .errors import MissingDependenciesError


class DependencyValidator:
    """
    Checks that a consumer's dependencies are present.

    Example:
        class HouseBuilder:
            def __init__(self, deps):
                DependencyValidator().require(deps, "createHouse", "createWindow")
    """

    def require(self, dependencies: Any, *names: str) -> None:
        """
        Raise MissingDependenciesError listing every missing dependency.

        Args:
            dependencies: Accessor or mapping to check
            *names: Required names, checked by membership (lazy values are
                not resolved). Without names, ``dependencies`` must be a
                mapping and every key whose value is None is reported.
        """
        if names:
            missing = [name for name in names if name not in dependencies]
        else:
            missing = [name for name, value in dependencies.items() if value is None]

        if missing:
            raise MissingDependenciesError(missing)


def require(dependencies: Any, *names: str) -> None:
    """Module-level shortcut for ``DependencyValidator().require``."""
    DependencyValidator().require(dependencies, *names)
