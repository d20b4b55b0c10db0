"""
Testing utilities for registries.
"""

from typing import Any, Callable, List, Optional

from .accessor import Dependencies
from .diagnostics import RegistryEvent, RegistryEventType


class SpyResolver:
    """
    Lazy resolver that records its invocations.

    Example:
        spy = SpyResolver(lambda deps: "value")
        registry.register_lazy("name", spy)
        registry.export().name
        assert spy.call_count == 1
    """

    def __init__(self, func: Optional[Callable[[Dependencies], Any]] = None, value: Any = "value"):
        self._func = func
        self._value = value
        self.call_count = 0
        self.calls: List[Dependencies] = []

    def __call__(self, dependencies: Dependencies) -> Any:
        self.call_count += 1
        self.calls.append(dependencies)
        if self._func is not None:
            return self._func(dependencies)
        return self._value

    def reset(self) -> None:
        """Reset tracking."""
        self.call_count = 0
        self.calls.clear()


class RecordingListener:
    """Diagnostic listener that keeps every event for assertions."""

    def __init__(self):
        self.events: List[RegistryEvent] = []

    def on_event(self, event: RegistryEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: RegistryEventType) -> List[RegistryEvent]:
        return [event for event in self.events if event.type == event_type]

    def clear(self) -> None:
        self.events.clear()
